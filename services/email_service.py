"""Email service for welcome, contact and feedback emails."""

import html
import logging
import os
import smtplib
import socket
from datetime import datetime, timezone
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

logger = logging.getLogger(__name__)


class EmailService:
    """
    SMTP email sender.

    When SMTP credentials are missing (local development) emails are written
    to the log instead of sent, and every send reports success.
    """

    def __init__(self):
        self.smtp_host = os.getenv('SMTP_HOST', 'smtp.gmail.com')
        self.smtp_port = int(os.getenv('SMTP_PORT', '587'))
        self.smtp_user = os.getenv('SMTP_USER', '')
        self.smtp_password = os.getenv('SMTP_PASSWORD', '')
        self.from_email = os.getenv('FROM_EMAIL', self.smtp_user)
        self.from_name = os.getenv('FROM_NAME', 'Slango')
        self.team_email = os.getenv('TEAM_EMAIL', 'team@slango.app')
        self.frontend_url = os.getenv('FRONTEND_URL', 'http://localhost:5173')
        self.smtp_timeout = int(os.getenv('SMTP_TIMEOUT', '10'))

    @property
    def is_configured(self):
        return bool(self.smtp_user and self.smtp_password)

    def _create_connection(self):
        server = smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.smtp_timeout)
        server.starttls()
        server.login(self.smtp_user, self.smtp_password)
        return server

    def send_email(self, to_email, subject, html_content, text_content=None, reply_to=None):
        """
        Send an email.

        Returns:
            bool: True if sent (or logged in dev mode), False otherwise
        """
        if not self.is_configured:
            logger.info(f"[DEV MODE] Email to {to_email}: {subject}")
            if text_content:
                logger.debug(text_content)
            return True

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = to_email
        if reply_to:
            msg['Reply-To'] = reply_to

        if text_content:
            msg.attach(MIMEText(text_content, 'plain'))
        msg.attach(MIMEText(html_content, 'html'))

        try:
            server = self._create_connection()
            server.sendmail(self.from_email, to_email, msg.as_string())
            server.quit()
            logger.info(f"Sent email '{subject}' to {to_email}")
            return True
        except socket.timeout:
            logger.error(f"SMTP connection timed out after {self.smtp_timeout}s")
            return False
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed: {str(e)}")
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {str(e)}", exc_info=True)
            return False

    def send_welcome_email(self, to_email, first_name=None):
        display_name = html.escape(first_name) if first_name else 'there'
        subject = "Welcome to Slango"

        html_content = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h1 style="color: #764ba2;">Welcome to Slango!</h1>
            <h2>Hey {display_name}!</h2>
            <p>Thanks for signing up. Slango translates between Standard English, Gen Z,
            Millennial, British and Formal English, plus Spanish and French.</p>
            <ul>
                <li>Get plain-English explanations for every translation</li>
                <li>Listen to translations with voice playback</li>
                <li>Save your favorite translations and browse your history</li>
            </ul>
            <p><a href="{self.frontend_url}">Start translating</a></p>
        </div>
        """
        text_content = (
            f"Hey {first_name or 'there'}!\n\n"
            f"Thanks for signing up for Slango. Start translating at {self.frontend_url}\n"
        )
        return self.send_email(to_email, subject, html_content, text_content)

    def send_team_notification(self, email, first_name=None, last_name=None):
        full_name = ' '.join(part for part in (first_name, last_name) if part) or 'Unknown'
        signup_date = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')
        html_content = f"""
        <div style="font-family: Arial, sans-serif; max-width: 500px; margin: 0 auto; padding: 20px;">
            <h2>New User Signup</h2>
            <p><strong>Name:</strong> {html.escape(full_name)}</p>
            <p><strong>Email:</strong> {html.escape(email)}</p>
            <p><strong>Signup Date:</strong> {signup_date}</p>
        </div>
        """
        return self.send_email(self.team_email, "New Slango User Signup", html_content)

    def send_contact_email(self, name, email, subject, message):
        html_content = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h2>New Contact Form Submission</h2>
            <p><strong>Name:</strong> {html.escape(name)}</p>
            <p><strong>Email:</strong> {html.escape(email)}</p>
            <p><strong>Subject:</strong> {html.escape(subject)}</p>
            <p style="white-space: pre-wrap;">{html.escape(message)}</p>
        </div>
        """
        text_content = f"From: {name} <{email}>\nSubject: {subject}\n\n{message}"
        return self.send_email(
            self.team_email,
            f"Contact Form: {subject}",
            html_content,
            text_content,
            reply_to=email
        )

    def send_feedback_email(self, message, feedback_type='feedback', user_agent=None):
        label = 'Idea' if feedback_type == 'idea' else 'Feedback'
        html_content = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h2>New {label} Submission</h2>
            <p style="white-space: pre-wrap;">{html.escape(message)}</p>
            <p style="color: #999; font-size: 12px;">User agent: {html.escape(user_agent or 'Unknown')}</p>
        </div>
        """
        text_content = f"{label}:\n\n{message}\n\nUser agent: {user_agent or 'Unknown'}"
        return self.send_email(self.team_email, f"Slango {label}", html_content, text_content)


email_service = EmailService()

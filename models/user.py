from models import db
from datetime import datetime, timezone
from flask_login import UserMixin
from sqlalchemy.orm import validates
import re


class User(UserMixin, db.Model):
    """User model - mirrors the identity provider's account record"""
    __tablename__ = 'users'

    # Subject identifier issued by the identity provider
    id = db.Column(db.String, primary_key=True)

    email = db.Column(db.String, unique=True, nullable=False, index=True)
    first_name = db.Column(db.String)
    last_name = db.Column(db.String)
    profile_image_url = db.Column(db.String)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    saved_translations = db.relationship(
        'SavedTranslation', back_populates='user', lazy='dynamic', cascade='all, delete-orphan'
    )
    history_translations = db.relationship(
        'HistoryTranslation', back_populates='user', lazy='dynamic', cascade='all, delete-orphan'
    )

    @validates('email')
    def validate_email(self, key, email):
        if not email:
            raise ValueError('Email is required')
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not re.match(pattern, email):
            raise ValueError(f'Invalid email format: {email}')
        return email

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'profile_image_url': self.profile_image_url,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<User {self.email}>'

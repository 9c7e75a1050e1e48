from models import db
from datetime import datetime, timezone


class HistoryTranslation(db.Model):
    """HistoryTranslation model - translations auto-saved to a user's history"""
    __tablename__ = 'history_translations'

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.String, db.ForeignKey('users.id'), nullable=False, index=True)

    input_text = db.Column(db.Text, nullable=False)
    output_text = db.Column(db.Text, nullable=False)

    source_language = db.Column(db.String(40), nullable=False)
    target_language = db.Column(db.String(40), nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    # Relationships
    user = db.relationship('User', back_populates='history_translations')

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'input_text': self.input_text,
            'output_text': self.output_text,
            'source_language': self.source_language,
            'target_language': self.target_language,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<HistoryTranslation {self.id} user={self.user_id}>'

from models import db
from datetime import datetime, timezone


class SavedTranslation(db.Model):
    """SavedTranslation model - translations a user bookmarked"""
    __tablename__ = 'saved_translations'

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.String, db.ForeignKey('users.id'), nullable=False, index=True)

    input_text = db.Column(db.Text, nullable=False)
    output_text = db.Column(db.Text, nullable=False)

    source_language = db.Column(db.String(40), nullable=False, default='standard_english')
    target_language = db.Column(db.String(40), nullable=False, default='gen_z_english')

    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    user = db.relationship('User', back_populates='saved_translations')

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
        return f'<SavedTranslation {self.id} user={self.user_id}>'

from models import db
from datetime import datetime, timezone


class Translation(db.Model):
    """Translation model - anonymous log of produced translations"""
    __tablename__ = 'translations'

    id = db.Column(db.Integer, primary_key=True)

    input_text = db.Column(db.Text, nullable=False)
    output_text = db.Column(db.Text, nullable=False)

    source_language = db.Column(db.String(40), nullable=False, default='standard_english')
    target_language = db.Column(db.String(40), nullable=False, default='gen_z_english')

    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'input_text': self.input_text,
            'output_text': self.output_text,
            'source_language': self.source_language,
            'target_language': self.target_language,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Translation {self.id} {self.source_language}->{self.target_language}>'

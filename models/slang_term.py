from models import db
from datetime import datetime, timezone
from sqlalchemy.orm import validates

SLANG_STATUSES = ('current', 'fading', 'deprecated')


class SlangTerm(db.Model):
    """SlangTerm model - reference table for slang freshness heuristics"""
    __tablename__ = 'slang_terms'

    id = db.Column(db.Integer, primary_key=True)

    term = db.Column(db.String, unique=True, nullable=False)

    # e.g. ["rizzed up", "rizzing"]
    aliases = db.Column(db.JSON, default=list)

    status = db.Column(db.String(20), nullable=False, default='current')

    last_seen = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    source_count_30d = db.Column(db.Integer, default=0)
    trend_hits_30d = db.Column(db.Integer, default=0)
    age_months = db.Column(db.Integer, default=0)
    region = db.Column(db.String(10), default='US')
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    @validates('status')
    def validate_status(self, key, status):
        if status not in SLANG_STATUSES:
            raise ValueError(f'status must be one of {SLANG_STATUSES}')
        return status

    @validates('aliases')
    def validate_aliases(self, key, aliases):
        if aliases is None:
            return []
        if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
            raise ValueError('aliases must be a list of strings')
        return aliases

    def to_dict(self):
        return {
            'id': self.id,
            'term': self.term,
            'aliases': self.aliases or [],
            'status': self.status,
            'last_seen': self.last_seen.isoformat() if self.last_seen else None,
            'source_count_30d': self.source_count_30d,
            'trend_hits_30d': self.trend_hits_30d,
            'age_months': self.age_months,
            'region': self.region,
            'notes': self.notes,
        }

    def __repr__(self):
        return f'<SlangTerm {self.term} ({self.status})>'

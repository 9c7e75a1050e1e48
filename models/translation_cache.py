from models import db
from datetime import datetime, timezone


class TranslationCache(db.Model):
    """TranslationCache model - memoizes LLM translations by content + language pair"""
    __tablename__ = 'translation_cache'

    # SHA-256 hex of "source|target|normalized input"
    id = db.Column(db.String(64), primary_key=True)

    input_text = db.Column(db.Text, nullable=False)
    source_language = db.Column(db.String(40), nullable=False)
    target_language = db.Column(db.String(40), nullable=False, index=True)

    output_text = db.Column(db.Text, nullable=False)
    explanation = db.Column(db.Text, nullable=False, default='')

    # Standard English pivot between two styles
    bridge_text = db.Column(db.Text)

    # 0-100, only set when freshness reranking picked the output
    quality_score = db.Column(db.Integer)

    # e.g. ["bridge_normalization", "llm_candidates", "freshness_rerank"]
    processing_layers = db.Column(db.JSON, nullable=False, default=list)

    # Voice used for audio playback of output_text
    voice_id = db.Column(db.String)

    hit_count = db.Column(db.Integer, nullable=False, default=1)
    last_accessed_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    created_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {
            'id': self.id,
            'input_text': self.input_text,
            'source_language': self.source_language,
            'target_language': self.target_language,
            'output_text': self.output_text,
            'explanation': self.explanation,
            'bridge_text': self.bridge_text,
            'quality_score': self.quality_score,
            'processing_layers': self.processing_layers or [],
            'voice_id': self.voice_id,
            'hit_count': self.hit_count,
            'last_accessed_at': self.last_accessed_at.isoformat() if self.last_accessed_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<TranslationCache {self.id[:12]} {self.source_language}->{self.target_language} hits={self.hit_count}>'

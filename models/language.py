from models import db
from sqlalchemy.orm import validates

LANGUAGE_KINDS = ('english_variant', 'foreign')


class Language(db.Model):
    """Language model - translation styles (English variants) and foreign languages"""
    __tablename__ = 'languages'

    # gen_z_english, standard_english, spanish, ...
    code = db.Column(db.String(40), primary_key=True)

    # Gen Z English, Standard English, Spanish
    name = db.Column(db.String(60), nullable=False)

    kind = db.Column(db.String(20), nullable=False, default='english_variant')

    # 1,2,3 for popular styles, 999 default for others (sorts last)
    display_order = db.Column(db.Integer, default=999)

    @validates('kind')
    def validate_kind(self, key, kind):
        if kind not in LANGUAGE_KINDS:
            raise ValueError(f'kind must be one of {LANGUAGE_KINDS}')
        return kind

    def to_dict(self):
        return {
            'code': self.code,
            'name': self.name,
            'kind': self.kind,
            'display_order': self.display_order,
        }

    def __repr__(self):
        return f'<Language {self.code} - {self.name}>'

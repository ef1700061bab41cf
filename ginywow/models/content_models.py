# ginywow/models/content_models.py

import uuid
from datetime import datetime
from .. import db


def generate_uuid():
    return str(uuid.uuid4())


class Thumbnail(db.Model):
    __tablename__ = 'thumbnails'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    original_image_data = db.Column(db.Text, nullable=False)  # base64
    enhanced_image_data = db.Column(db.Text, nullable=True)  # base64, set by the enhancement step
    file_name = db.Column(db.Text, nullable=False)
    file_size = db.Column(db.Float, nullable=False)
    # {contrast, saturation, clarity, ctrImprovement}
    enhancement_metrics = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (db.CheckConstraint('file_size > 0', name='ck_thumbnails_file_size_positive'),)

    title_optimizations = db.relationship('TitleOptimization', backref='thumbnail', lazy='dynamic')

    @property
    def is_enhanced(self):
        return self.enhanced_image_data is not None

    def to_dict(self):
        return {
            'id': self.id,
            'originalImageData': self.original_image_data,
            'enhancedImageData': self.enhanced_image_data,
            'fileName': self.file_name,
            'fileSize': self.file_size,
            'enhancementMetrics': self.enhancement_metrics,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class TitleOptimization(db.Model):
    __tablename__ = 'title_optimizations'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    original_title = db.Column(db.Text, nullable=False)
    # [{title, score, estimatedCtr, seoScore, tags, reasoning}], stays NULL until scored
    optimized_titles = db.Column(db.JSON, nullable=True)
    thumbnail_id = db.Column(db.String(36), db.ForeignKey('thumbnails.id'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'originalTitle': self.original_title,
            'optimizedTitles': self.optimized_titles or [],
            'thumbnailId': self.thumbnail_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

from blogboard.db import db
from datetime import datetime

class FileItem(db.Model):
    __tablename__ = "file_items"

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False
    )
    original_name = db.Column(db.String(255), nullable=False)
    object_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(100), nullable=False)
    size = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_local(self) -> bool:
        return self.object_name.startswith("static/")

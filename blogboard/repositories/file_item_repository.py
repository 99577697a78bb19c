from blogboard.models.file_item_model import FileItem
from blogboard.db import db

def add_file_item(post_id, original_name, object_name, mime_type, size):
    file_item = FileItem(
        post_id=post_id,
        original_name=original_name,
        object_name=object_name,
        mime_type=mime_type,
        size=size
    )
    db.session.add(file_item)
    return file_item


def get_by_id(file_id):
    return db.session.get(FileItem, file_id)

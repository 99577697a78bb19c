from flask import url_for

from blogboard.extensions.extensions import ma
from blogboard.schemas.comment_schema import CommentResponseSchema


class FileItemSchema(ma.Schema):
    id = ma.Int()
    original_name = ma.Str()
    mime_type = ma.Str()
    size = ma.Int()
    download_url = ma.Method("get_download_url")

    def get_download_url(self, file_item):
        return url_for("posts.download_file", file_id=file_item.id)


class PostListItemSchema(ma.Schema):
    id = ma.Int()
    title = ma.Str()
    author = ma.Str()
    liked = ma.Int()
    created_at = ma.DateTime()


class PostResponseSchema(ma.Schema):
    id = ma.Int()
    title = ma.Str()
    content = ma.Str()
    author = ma.Str()
    liked = ma.Int()
    created_at = ma.DateTime()
    modified_at = ma.DateTime()
    files = ma.List(ma.Nested(FileItemSchema))
    comment_list = ma.List(ma.Nested(CommentResponseSchema), attribute="comments")

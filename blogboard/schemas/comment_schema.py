from blogboard.extensions.extensions import ma



class CommentResponseSchema(ma.Schema):
    id = ma.Int()
    post_id = ma.Int()
    parent_id = ma.Int(allow_none=True)
    author = ma.Str()
    text = ma.Str()
    is_deleted = ma.Bool()
    created_at = ma.DateTime()
    modified_at = ma.DateTime()

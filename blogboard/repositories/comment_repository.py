from blogboard.db import db
from blogboard.models.comment_model import Comment


def create_comment(post_id, author, password_hash, text, parent_id=None):
    comment = Comment(
        post_id=post_id,
        parent_id=parent_id,
        author=author,
        password_hash=password_hash,
        text=text
    )

    db.session.add(comment)
    db.session.flush()
    return comment


def get_by_id(comment_id):
    return db.session.get(Comment, comment_id)


def get_comments_by_post(post_id):
    return (
        Comment.query
        .filter(Comment.post_id == post_id)
        .order_by(Comment.id.asc())
        .all()
    )

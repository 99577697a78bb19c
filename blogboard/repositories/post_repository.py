from sqlalchemy import func
from sqlalchemy.orm import selectinload

from blogboard.db import db
from blogboard.models.post_model import Post


SEARCHABLE_FIELDS = {
    "title": Post.title,
    "content": Post.content,
    "author": Post.author,
}


def create_post(title, content, author, password_hash):
    post = Post(
        title=title,
        content=content,
        author=author,
        password_hash=password_hash
    )
    db.session.add(post)
    db.session.flush()

    return post


def get_by_id(post_id):
    return db.session.get(Post, post_id)


def get_with_details(post_id):
    return (
        Post.query
        .options(selectinload(Post.files), selectinload(Post.comments))
        .filter(Post.id == post_id)
        .first()
    )


def get_all():
    return Post.query.order_by(Post.created_at.desc(), Post.id.desc()).all()


def find_containing(field, keyword):
    column = SEARCHABLE_FIELDS[field]
    return (
        Post.query
        .filter(func.lower(column).contains(keyword.lower(), autoescape=True))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )


def delete_post(post):
    db.session.delete(post)

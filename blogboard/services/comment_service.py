from blogboard.db import db
from blogboard.errors import EntityNotFoundError
from blogboard.repositories import comment_repository, post_repository
from blogboard.services.password_service import hash_password, verify_password


def _require_text(text):
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Comment text is required")
    return text.strip()


def _parse_id(value, field):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {field}")


def _get_comment_or_raise(comment_id):
    comment = comment_repository.get_by_id(comment_id)
    if not comment:
        raise EntityNotFoundError("Comment", comment_id)
    return comment


def _resolve_parent(parent_id, post_id):
    # 0 and null both mean a root comment
    if not parent_id:
        return None

    parent = comment_repository.get_by_id(parent_id)
    if not parent or parent.post_id != post_id:
        raise ValueError("Invalid parent comment")
    if parent.parent_id is not None:
        raise ValueError("Replies can only be nested one level")
    return parent.id


def create_comment(data):
    data = data or {}
    post_id = _parse_id(data.get("post_id"), "post id")
    if post_id is None:
        raise ValueError("Post id is required")

    author = data.get("author")
    if not isinstance(author, str) or not author.strip():
        raise ValueError("Author is required")
    text = _require_text(data.get("text"))
    password_hash = hash_password(data.get("password"))

    if not post_repository.get_by_id(post_id):
        raise EntityNotFoundError("Post", post_id)

    parent_id = _resolve_parent(_parse_id(data.get("parent_id"), "parent id"), post_id)

    comment = comment_repository.create_comment(
        post_id=post_id,
        author=author.strip(),
        password_hash=password_hash,
        text=text,
        parent_id=parent_id
    )

    db.session.commit()
    return comment


def list_comments(post_id):
    if not post_repository.get_by_id(post_id):
        raise EntityNotFoundError("Post", post_id)
    return comment_repository.get_comments_by_post(post_id)


def update_comment(comment_id, password, text):
    comment = _get_comment_or_raise(comment_id)
    verify_password(password, comment.password_hash, target=f"comment {comment_id}")

    if comment.is_deleted:
        raise ValueError("Deleted comments cannot be edited")

    comment.text = _require_text(text)
    db.session.commit()
    return comment.id


def delete_comment(comment_id, password):
    comment = _get_comment_or_raise(comment_id)
    verify_password(password, comment.password_hash, target=f"comment {comment_id}")

    comment.is_deleted = True
    db.session.commit()
    return comment.id

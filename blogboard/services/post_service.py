from flask import current_app

from blogboard.db import db
from blogboard.errors import EntityNotFoundError
from blogboard.repositories import file_item_repository, post_repository
from blogboard.services import storage_service
from blogboard.services.password_service import hash_password, verify_password


SEARCH_TYPES = tuple(post_repository.SEARCHABLE_FIELDS)


def _require_non_empty_string(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field.capitalize()} is required")
    return value.strip()


def _get_post_or_raise(post_id):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise EntityNotFoundError("Post", post_id)
    return post


def _attach_files(post, files):
    for file in files:
        object_name, original_name, mime_type, size = storage_service.store_file(file, post.id)
        file_item_repository.add_file_item(
            post_id=post.id,
            original_name=original_name,
            object_name=object_name,
            mime_type=mime_type,
            size=size,
        )


def create_post(data, files=None):
    data = data or {}
    title = _require_non_empty_string(data.get("title"), "title")
    content = _require_non_empty_string(data.get("content"), "content")
    author = _require_non_empty_string(data.get("author"), "author")
    password_hash = hash_password(data.get("password"))
    files = storage_service.validate_files(files)

    try:
        post = post_repository.create_post(
            title=title,
            content=content,
            author=author,
            password_hash=password_hash,
        )
        _attach_files(post, files)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info("Post %s created with %d file(s)", post.id, len(files))
    return post.id


def get_post(post_id):
    post = post_repository.get_with_details(post_id)
    if not post:
        raise EntityNotFoundError("Post", post_id)
    return post


def list_posts():
    return post_repository.get_all()


def update_post(post_id, data, files=None):
    data = data or {}
    post = _get_post_or_raise(post_id)
    verify_password(data.get("password"), post.password_hash, target=f"post {post_id}")

    changes = {}
    for field in ("title", "content", "author"):
        if data.get(field) is not None:
            changes[field] = _require_non_empty_string(data.get(field), field)
    files = storage_service.validate_files(files)

    try:
        for field, value in changes.items():
            setattr(post, field, value)
        _attach_files(post, files)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info("Post %s updated", post_id)
    return post.id


def delete_post(post_id, password):
    post = _get_post_or_raise(post_id)
    verify_password(password, post.password_hash, target=f"post {post_id}")

    post_repository.delete_post(post)
    db.session.commit()

    current_app.logger.info("Post %s deleted", post_id)
    return post_id


def search_posts(search_type, keyword):
    if search_type not in SEARCH_TYPES:
        raise ValueError(f"Search type must be one of: {', '.join(SEARCH_TYPES)}")
    if not isinstance(keyword, str):
        raise ValueError("Keyword is required")

    posts = post_repository.find_containing(search_type, keyword)
    current_app.logger.info(
        "Search by %s for %r returned %d post(s)", search_type, keyword, len(posts)
    )
    return posts


def like_post(post_id):
    post = _get_post_or_raise(post_id)
    post.liked = (post.liked or 0) + 1
    db.session.commit()
    return post.liked


def get_file(file_id):
    file_item = file_item_repository.get_by_id(file_id)
    if not file_item:
        raise EntityNotFoundError("File", file_id)
    return file_item

import json

from flask import Blueprint, current_app, request, jsonify
from werkzeug.formparser import MultiPartParser

from blogboard.errors import (
    EntityNotFoundError,
    FileStorageError,
    InvalidPasswordError,
    error_response,
)
from blogboard.schemas.post_schema import PostListItemSchema, PostResponseSchema
from blogboard.services import post_service, storage_service

post_bp = Blueprint("posts", __name__)

POST_FIELDS = ("title", "content", "author", "password")


def _parse_other_multipart():
    # werkzeug only fills request.form/files for multipart/form-data
    boundary = request.mimetype_params.get("boundary")
    if not boundary:
        raise ValueError("Missing multipart boundary")

    parser = MultiPartParser(
        max_form_memory_size=current_app.config.get("MAX_FORM_MEMORY_SIZE"),
    )
    return parser.parse(
        request.stream,
        boundary.encode("latin-1"),
        request.content_length,
    )


def _read_multipart_payload(form, uploads):
    data_field = form.get("data")
    data_file = uploads.get("data")
    raw = data_field if data_field is not None else (data_file.read() if data_file else None)

    if raw is not None:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            raise ValueError("Invalid JSON body")
    else:
        data = {field: form.get(field) for field in POST_FIELDS}

    files = (
        uploads.getlist("files")
        or uploads.getlist("files[]")
    )
    single = uploads.get("file")
    if single:
        files.append(single)
    return data, files


def _read_post_payload():
    mimetype = request.mimetype
    if mimetype == "multipart/form-data":
        data, files = _read_multipart_payload(request.form, request.files)
    elif mimetype.startswith("multipart/"):
        data, files = _read_multipart_payload(*_parse_other_multipart())
    else:
        data, files = request.get_json(silent=True), []

    if not isinstance(data, dict):
        raise ValueError("Invalid JSON body")
    return data, files


@post_bp.route("/posts", methods=["POST"])
def create_post():
    try:
        data, files = _read_post_payload()
        post_id = post_service.create_post(data, files)
        return jsonify({"id": post_id}), 200
    except FileStorageError as e:
        return error_response(e, 503)
    except ValueError as e:
        return error_response(e, 400)


@post_bp.route("/posts", methods=["GET"])
def list_posts():
    posts = post_service.list_posts()
    return jsonify(PostListItemSchema(many=True).dump(posts)), 200


@post_bp.route("/posts/search", methods=["GET"])
def search_posts():
    search_type = request.args.get("type", default="title")
    keyword = request.args.get("keyword", default="")

    try:
        posts = post_service.search_posts(search_type, keyword)
    except ValueError as e:
        return error_response(e, 400)
    return jsonify(PostListItemSchema(many=True).dump(posts)), 200


@post_bp.route("/posts/<int:post_id>", methods=["GET"])
def get_post(post_id):
    try:
        post = post_service.get_post(post_id)
    except EntityNotFoundError as e:
        return error_response(e, 404)
    return jsonify(PostResponseSchema().dump(post)), 200


@post_bp.route("/posts/<int:post_id>", methods=["PUT"])
def update_post(post_id):
    try:
        data, files = _read_post_payload()
        post_service.update_post(post_id, data, files)
        return jsonify({"id": post_id}), 200
    except InvalidPasswordError as e:
        return error_response(e, 403)
    except EntityNotFoundError as e:
        return error_response(e, 404)
    except FileStorageError as e:
        return error_response(e, 503)
    except ValueError as e:
        return error_response(e, 400)


@post_bp.route("/posts/<int:post_id>", methods=["DELETE"])
def delete_post(post_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        post_service.delete_post(post_id, data.get("password"))
        return jsonify({"id": post_id}), 200
    except InvalidPasswordError as e:
        return error_response(e, 403)
    except EntityNotFoundError as e:
        return error_response(e, 404)


@post_bp.route("/posts/<int:post_id>/like", methods=["POST"])
def like_post(post_id):
    try:
        liked = post_service.like_post(post_id)
    except EntityNotFoundError as e:
        return error_response(e, 404)
    return jsonify({"id": post_id, "liked": liked}), 200


@post_bp.route("/posts/files/<int:file_id>", methods=["GET"])
def download_file(file_id):
    try:
        file_item = post_service.get_file(file_id)
        return storage_service.open_download(file_item)
    except EntityNotFoundError as e:
        return error_response(e, 404)
    except FileStorageError as e:
        return error_response(e, 503)

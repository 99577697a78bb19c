from flask import Blueprint, request, jsonify

from blogboard.errors import EntityNotFoundError, InvalidPasswordError, error_response
from blogboard.schemas.comment_schema import CommentResponseSchema
from blogboard.services import comment_service


comment_bp = Blueprint("comments", __name__)

# camelCase keys older clients still send
KEY_ALIASES = {"postId": "post_id", "parentId": "parent_id"}


def _read_json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Invalid JSON body")

    for alias, key in KEY_ALIASES.items():
        if alias in data and key not in data:
            data[key] = data[alias]
    return data


@comment_bp.route("/comments", methods=["POST"])
def create_comment():
    try:
        data = _read_json_body()
        comment = comment_service.create_comment(data)
        return jsonify(CommentResponseSchema().dump(comment)), 200
    except EntityNotFoundError as e:
        return error_response(e, 404)
    except ValueError as e:
        return error_response(e, 400)


@comment_bp.route("/comments/<int:post_id>", methods=["GET"])
def list_comments(post_id):
    try:
        comments = comment_service.list_comments(post_id)
    except EntityNotFoundError as e:
        return error_response(e, 404)
    return jsonify(CommentResponseSchema(many=True).dump(comments)), 200


@comment_bp.route("/comments/<int:comment_id>", methods=["PUT"])
def update_comment(comment_id):
    try:
        data = _read_json_body()
        comment_service.update_comment(comment_id, data.get("password"), data.get("text"))
        return jsonify({"id": comment_id}), 200
    except InvalidPasswordError as e:
        return error_response(e, 403)
    except EntityNotFoundError as e:
        return error_response(e, 404)
    except ValueError as e:
        return error_response(e, 400)


@comment_bp.route("/comments/<int:comment_id>", methods=["POST", "DELETE"])
def delete_comment(comment_id):
    try:
        data = _read_json_body()
        comment_service.delete_comment(comment_id, data.get("password"))
        return jsonify({"id": comment_id}), 200
    except InvalidPasswordError as e:
        return error_response(e, 403)
    except EntityNotFoundError as e:
        return error_response(e, 404)
    except ValueError as e:
        return error_response(e, 400)

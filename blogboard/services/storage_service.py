import os
import unicodedata
import uuid
from urllib.parse import quote

from flask import Response, current_app, send_from_directory, stream_with_context
from minio.error import S3Error

from blogboard.errors import EntityNotFoundError, FileStorageError
from blogboard.extensions.minio_client import ensure_bucket, get_minio_client


ALLOWED_ATTACHMENT_EXTENSIONS = {
    "jpg", "jpeg", "png", "gif", "webp",
    "pdf", "txt", "md", "csv",
    "zip", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
}

LOCAL_PREFIX = "static/"


def _extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def _original_name(filename) -> str:
    # keep the client's name for downloads; path components are dropped
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    return name or "attachment"


def _content_disposition(filename: str) -> dict:
    try:
        filename.encode("ascii")
        return {"filename": filename}
    except UnicodeEncodeError:
        simple = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
        return {
            "filename": simple or "attachment",
            "filename*": "UTF-8''" + quote(filename, safe="!#$&+-.^_`|~"),
        }


def _stream_and_length(file_storage):
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return stream, length
    except (AttributeError, OSError):
        return stream, -1


def validate_files(files):
    files = [f for f in (files or []) if f is not None]
    max_files = current_app.config.get("MAX_ATTACHMENTS", 5)
    if len(files) > max_files:
        raise ValueError(f"Maximum {max_files} files allowed")

    for file in files:
        filename = getattr(file, "filename", "") or ""
        if not filename:
            raise ValueError("File name is required")
        if _extension(filename) not in ALLOWED_ATTACHMENT_EXTENSIONS:
            raise ValueError(f"Unsupported file type: {filename}")

    return files


def _store_locally(file_storage, post_id: int, extension: str) -> str:
    filename = f"{uuid.uuid4()}.{extension}"
    relative_parts = ["uploads", "posts", str(post_id), filename]
    absolute_path = os.path.join(current_app.static_folder, *relative_parts)
    os.makedirs(os.path.dirname(absolute_path), exist_ok=True)

    file_storage.stream.seek(0)
    file_storage.save(absolute_path)
    return LOCAL_PREFIX + "/".join(relative_parts)


def _store_in_minio(file_storage, post_id: int, extension: str, mime_type: str) -> str:
    minio = get_minio_client()
    bucket = current_app.config["MINIO_BUCKET"]
    ensure_bucket(minio, bucket)

    object_name = f"posts/{post_id}/{uuid.uuid4()}.{extension}"
    stream, length = _stream_and_length(file_storage)
    upload_kwargs = {
        "bucket_name": bucket,
        "object_name": object_name,
        "data": stream,
        "length": length,
        "content_type": mime_type,
    }
    if length == -1:
        upload_kwargs["part_size"] = 10 * 1024 * 1024

    minio.put_object(**upload_kwargs)
    return object_name


def store_file(file_storage, post_id: int):
    """Persist one upload and return (object_name, original_name, mime_type, size)."""
    original_name = _original_name(file_storage.filename)
    extension = _extension(file_storage.filename)
    mime_type = file_storage.mimetype or "application/octet-stream"
    _, size = _stream_and_length(file_storage)

    try:
        object_name = _store_in_minio(file_storage, post_id, extension, mime_type)
    except Exception as e:
        if not current_app.config.get("MEDIA_LOCAL_FALLBACK_ENABLED", True):
            current_app.logger.error("Object storage failed for post %s: %s", post_id, e)
            raise FileStorageError("File storage is unavailable") from e
        current_app.logger.warning(
            "Object storage unavailable, storing post %s attachment locally: %s",
            post_id, e,
        )
        try:
            object_name = _store_locally(file_storage, post_id, extension)
        except OSError as local_error:
            current_app.logger.error("Local storage failed for post %s: %s", post_id, local_error)
            raise FileStorageError("File storage is unavailable") from local_error

    return object_name, original_name, mime_type, max(size, 0)


def _download_local(file_item):
    relative_path = file_item.object_name[len(LOCAL_PREFIX):]
    absolute_path = os.path.join(current_app.static_folder, relative_path)
    if not os.path.isfile(absolute_path):
        raise EntityNotFoundError("File", file_item.id)

    return send_from_directory(
        current_app.static_folder,
        relative_path,
        mimetype=file_item.mime_type,
        as_attachment=True,
        download_name=file_item.original_name,
    )


def _download_from_minio(file_item):
    bucket = current_app.config["MINIO_BUCKET"]
    try:
        minio_response = get_minio_client().get_object(
            bucket_name=bucket,
            object_name=file_item.object_name,
        )
    except S3Error as e:
        if e.code in {"NoSuchKey", "NoSuchBucket", "NoSuchObject"}:
            raise EntityNotFoundError("File", file_item.id) from e
        current_app.logger.error("Download of file %s failed: %s", file_item.id, e.code)
        raise FileStorageError("File storage is unavailable") from e
    except Exception as e:
        current_app.logger.error("Download of file %s failed: %s", file_item.id, e)
        raise FileStorageError("File storage is unavailable") from e

    chunk_size = max(int(current_app.config.get("MEDIA_STREAM_CHUNK_SIZE", 256 * 1024)), 1024)

    def _stream():
        try:
            for chunk in minio_response.stream(chunk_size):
                yield chunk
        finally:
            minio_response.close()
            minio_response.release_conn()

    response = Response(
        stream_with_context(_stream()),
        status=200,
        mimetype=file_item.mime_type or "application/octet-stream",
        direct_passthrough=True,
    )
    response.headers.set(
        "Content-Disposition", "attachment", **_content_disposition(file_item.original_name)
    )
    if file_item.size:
        response.headers["Content-Length"] = str(file_item.size)
    return response


def open_download(file_item):
    if file_item.is_local:
        return _download_local(file_item)
    return _download_from_minio(file_item)

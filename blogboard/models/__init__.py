from blogboard.models.post_model import Post
from blogboard.models.comment_model import Comment
from blogboard.models.file_item_model import FileItem

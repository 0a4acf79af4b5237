from contextlib import contextmanager

from werkzeug.utils import secure_filename

from core.errors import ValidationError
from core.imports import current_app, logging, os, url_for, uuid

logger = logging.getLogger(__name__)


class UploadStorage:
    """Stores uploaded images on local disk under a unique name."""

    def __init__(self, folder, allowed_extensions):
        self.folder = folder
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}

    @classmethod
    def from_app(cls, app=None):
        app = app or current_app
        return cls(app.config["UPLOAD_FOLDER"], app.config["ALLOWED_IMAGE_EXTENSIONS"])

    def allowed_file(self, filename):
        return "." in filename and filename.rsplit(".", 1)[1].lower() in self.allowed_extensions

    def save(self, file):
        if file is None or not file.filename:
            raise ValidationError("No file selected for upload")
        if not self.allowed_file(file.filename):
            allowed = ", ".join(sorted(self.allowed_extensions))
            raise ValidationError(f"File type not allowed, expected one of: {allowed}")

        filename = f"{uuid.uuid4().hex}_{secure_filename(file.filename)}"
        os.makedirs(self.folder, exist_ok=True)
        file.save(os.path.join(self.folder, filename))
        logger.info("Stored upload %s", filename)
        return filename

    def delete(self, filename):
        path = os.path.join(self.folder, filename)
        if os.path.exists(path):
            os.remove(path)
            logger.info("Removed upload %s", filename)

    def public_url(self, filename):
        return url_for("uploaded_file", filename=filename, _external=True)

    @contextmanager
    def staged(self, file):
        """Save ``file`` and yield its URL; the file is removed if the block fails."""
        if file is None or not file.filename:
            yield None
            return
        filename = self.save(file)
        try:
            yield self.public_url(filename)
        except Exception:
            self.delete(filename)
            raise

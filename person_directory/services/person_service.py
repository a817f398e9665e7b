"""
Person registration.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core.exceptions import ValidationError
from ..core.records import OPTIONAL_FIELDS, PersonRecord
from ..core.store.base import DirectoryStore
from .upload_service import UploadPipeline

logger = logging.getLogger(__name__)

# (contents, original filename)
PhotoUpload = Tuple[bytes, Optional[str]]

def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None

class PersonService:
    """Adds persons to the directory."""

    def __init__(self, store: DirectoryStore, upload_pipeline: UploadPipeline):
        self.store = store
        self.upload_pipeline = upload_pipeline

    def add_person(self, data: Mapping[str, Optional[str]], photo: Optional[PhotoUpload] = None) -> PersonRecord:
        """
        Create a person record, uploading the photo first when one is given.

        Upload and insert are sequential: if the upload fails nothing is
        inserted; if the insert fails after a successful upload the photo
        stays in storage.

        Args:
            data: Form fields; ``name`` is required
            photo: Optional (contents, filename) of the photo

        Returns:
            The created person

        Raises:
            ValidationError: ``name`` missing or blank
            UploadError: The photo upload failed
            QueryError: The insert failed
        """
        name = _clean(data.get("name"))
        if not name:
            raise ValidationError("Name is required")

        values: Dict[str, Any] = {"name": name}
        for field in OPTIONAL_FIELDS:
            values[field] = _clean(data.get(field))

        if photo is not None:
            contents, filename = photo
            values["photo_url"] = self.upload_pipeline.upload_permanent(contents, filename)

        person = self.store.insert_person(values)
        logger.info(f"Added person {person.id} ({person.name})")
        return person

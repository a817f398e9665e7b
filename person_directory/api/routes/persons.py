"""
Person administration routes.
"""
import logging
from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from typing import Optional

from ...api.schemas import PersonResponse
from ...core.exceptions import QueryError, UploadError, ValidationError
from ...services.person_service import PersonService

logger = logging.getLogger(__name__)

def create_persons_router(person_service: PersonService) -> APIRouter:
    """Create persons router with dependencies."""
    router = APIRouter(prefix="/persons", tags=["persons"])

    @router.post("", response_model=PersonResponse, status_code=201)
    async def add_person(
        name: str = Form(""),
        address: Optional[str] = Form(None),
        phone_number: Optional[str] = Form(None),
        email: Optional[str] = Form(None),
        social_media: Optional[str] = Form(None),
        nid_number: Optional[str] = Form(None),
        photo: Optional[UploadFile] = File(None)
    ):
        """Add a person, uploading the photo first when one is attached."""
        data = {
            "name": name,
            "address": address,
            "phone_number": phone_number,
            "email": email,
            "social_media": social_media,
            "nid_number": nid_number,
        }
        try:
            upload = None
            if photo is not None and photo.filename:
                upload = (await photo.read(), photo.filename)
            person = person_service.add_person(data, photo=upload)
            return PersonResponse.model_validate(person)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except UploadError as e:
            logger.warning(f"Photo upload rejected: {e}")
            raise HTTPException(status_code=400, detail=str(e))
        except QueryError as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router

from fastapi import APIRouter, Depends, FastAPI, File, HTTPException, Path, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from PIL import Image
import io, logging, os
from typing import Optional

from peacecert.config import Settings, load_settings
from peacecert.errors import CertificateError, ValidationError
from peacecert.generator import generate_certificates
from peacecert.logging import setup_logging
from peacecert.models import CODE_PATTERN, CertificateKind, CertificateRequest
from peacecert.templates import template_path

logger = logging.getLogger("peacecert.api")

MAX_TEMPLATE_SIZE = 10 * 1024 * 1024


# ----------- Certificates -----------

def create_certificates(kind: CertificateKind, payload: CertificateRequest, settings: Settings):
    """
    Render the whole batch before answering. Any failure aborts the batch
    and is reported against the participant it happened on.
    """
    logger.info("Certificate request received", extra={"kind": kind.value})
    try:
        batch = generate_certificates(kind, payload.peacemakers, settings)
    except ValidationError as err:
        raise HTTPException(status_code=422, detail=err.to_dict())
    except CertificateError as err:
        raise HTTPException(
            status_code=500,
            detail=f"Error generating certificate for {err.participant}",
        )

    return {
        "status": "success",
        "message": "Certificates created successfully.",
        "identifier": batch.identifier,
        "files": [os.path.basename(f) for f in batch.files],
    }


# ----------- Router -----------

def build_router() -> APIRouter:
    router = APIRouter()

    @router.post("/peace")
    def create_peace_certificates(payload: CertificateRequest, settings: Settings = Depends(load_settings)):
        return create_certificates(CertificateKind.PEACEMAKING, payload, settings)

    @router.post("/recognition")
    def create_recognition_certificates(payload: CertificateRequest, settings: Settings = Depends(load_settings)):
        return create_certificates(CertificateKind.RECOGNITION, payload, settings)

    @router.get("/health")
    def health_check():
        return {"status": "ok"}

    @router.get("/template/{kind}/{language}")
    def get_template(
        kind: CertificateKind,
        language: str = Path(pattern=CODE_PATTERN),
        settings: Settings = Depends(load_settings),
    ):
        """
        Returns the template for a certificate kind and language as an image file for preview.
        """
        path = template_path(settings.templates_dir, kind, language)
        if not os.path.exists(path):
            raise HTTPException(status_code=404, detail="Template file not found")

        return FileResponse(path=path, media_type="image/jpeg", filename=os.path.basename(path))

    @router.post("/template/{kind}/{language}")
    async def upload_template(
        kind: CertificateKind,
        language: str = Path(pattern=CODE_PATTERN),
        file: UploadFile = File(...),
        settings: Settings = Depends(load_settings),
    ):
        """
        Upload a template (PNG or JPG) for a certificate kind and language,
        replacing the previous one. Stored as baseline JPEG.
        """
        allowed_types = ["image/png", "image/jpeg"]
        if file.content_type not in allowed_types:
            raise HTTPException(status_code=400, detail="Only PNG or JPG files are allowed")

        contents = await file.read()
        if len(contents) > MAX_TEMPLATE_SIZE:
            raise HTTPException(status_code=400, detail="File too large (max 10MB)")

        try:
            img = Image.open(io.BytesIO(contents))
            img.verify()  # integrity only, pixels are not loaded
        except Exception:
            raise HTTPException(status_code=400, detail="Invalid or corrupted image file")

        path = template_path(settings.templates_dir, kind, language)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        img = Image.open(io.BytesIO(contents)).convert("RGB")
        temp_path = path + ".tmp"
        img.save(temp_path, format="JPEG", quality=95)
        os.replace(temp_path, path)

        logger.info("Template replaced", extra={"kind": kind.value, "language": language})
        return {"status": "success", "message": "Template updated successfully", "template": os.path.basename(path)}

    return router


# ----------- App -----------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Proof of Peacemaking certificates")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Access-Control-Allow-Origin"],
    )
    app.include_router(build_router())
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "3030")),
        reload=True,
        reload_dirs=["."]
    )

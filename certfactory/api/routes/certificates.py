"""Certificate API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from certfactory.api.dependencies import get_issuer, get_record_reader
from certfactory.exceptions import CertFactoryError
from certfactory.models.certificate import Certificate, CertificateDescription, IssueRequest, PemExport
from certfactory.services.issuer_service import CertificateIssuer
from certfactory.services.record_service import CertificateRecordReader

router = APIRouter(prefix="/api/certificates", tags=["Certificates"])


@router.post("", response_model=Certificate, status_code=201)
def issue_certificate(
    body: IssueRequest,
    issuer: CertificateIssuer = Depends(get_issuer),
):
    """
    Issue a certificate, self-signed when no issuer record is given.
    """
    try:
        return issuer.issue(body.request, body.issuer)
    except CertFactoryError as e:
        raise HTTPException(status_code=400, detail={"error": type(e).__name__, "stage": e.stage, "message": str(e)})
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


@router.post("/describe", response_model=CertificateDescription)
def describe_certificate(
    record: Certificate,
    reader: CertificateRecordReader = Depends(get_record_reader),
):
    """
    Decode a certificate record for display.
    """
    try:
        validity = reader.validity(record)
        return CertificateDescription(
            serial=record.serial,
            description=reader.description(record),
            is_certificate_authority=record.is_certificate_authority,
            not_before=validity.not_before,
            not_after=validity.not_after,
            valid=validity.is_valid(),
            fingerprint_sha256=reader.fingerprint_sha256(record),
        )
    except CertFactoryError as e:
        raise HTTPException(status_code=400, detail={"error": type(e).__name__, "stage": e.stage, "message": str(e)})
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


@router.post("/pem", response_model=PemExport)
def export_pem(
    record: Certificate,
    reader: CertificateRecordReader = Depends(get_record_reader),
):
    """
    Export a certificate record as PEM - the response contains the private key!
    """
    try:
        return PemExport(certificate=reader.certificate_pem(record), private_key=reader.private_key_pem(record))
    except CertFactoryError as e:
        raise HTTPException(status_code=400, detail={"error": type(e).__name__, "stage": e.stage, "message": str(e)})
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")

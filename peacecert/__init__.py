"""Certificate rendering for Proof of Peacemaking and Proof of Recognition."""

from .generator import BatchResult, CertificateState, generate_certificates
from .models import CertificateKind, CertificateRequest, Peacemaker

__all__ = [
    "BatchResult",
    "CertificateKind",
    "CertificateRequest",
    "CertificateState",
    "Peacemaker",
    "generate_certificates",
]

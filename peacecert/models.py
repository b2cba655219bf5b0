"""Request schema and certificate kinds."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError


# Country and language codes end up in file paths.
CODE_PATTERN = r"^[A-Za-z0-9_-]+$"
# Names and wallets end up in file names; control characters are not allowed.
PRINTABLE_PATTERN = r"^[^\x00-\x1f\x7f]+$"


class CertificateKind(str, Enum):
    PEACEMAKING = "peace"
    RECOGNITION = "recognition"

    @property
    def template_prefix(self) -> str:
        return TEMPLATE_PREFIXES[self]


TEMPLATE_PREFIXES = {
    CertificateKind.PEACEMAKING: "ProofOfPeacemaking",
    CertificateKind.RECOGNITION: "ProofOfRecognition",
}

# Kinds whose certificates are tied to a wallet and name their file after it.
WALLET_REQUIRED = {CertificateKind.PEACEMAKING}


class Peacemaker(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, pattern=PRINTABLE_PATTERN)
    wallet: Optional[str] = Field(default=None, pattern=PRINTABLE_PATTERN)
    citizenship: str = Field(pattern=CODE_PATTERN)
    language: str = Field(pattern=CODE_PATTERN)


class CertificateRequest(BaseModel):
    peacemakers: List[Peacemaker] = Field(min_length=1)


def validate_for_kind(kind: CertificateKind, peacemakers: List[Peacemaker]) -> None:
    """
    Check the fields whose presence depends on the certificate kind.
    Raises ValidationError naming the first offending participant.
    """
    if kind in WALLET_REQUIRED:
        for peacemaker in peacemakers:
            if not peacemaker.wallet:
                raise ValidationError(
                    f"{kind.template_prefix} certificates require a wallet",
                    participant=peacemaker.name,
                )

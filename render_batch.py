import argparse
import json
import sys

from peacecert.config import load_settings
from peacecert.errors import CertificateError
from peacecert.generator import generate_certificates
from peacecert.logging import setup_logging
from peacecert.models import CertificateKind, CertificateRequest


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Render certificates for a request body stored as JSON.")
    parser.add_argument("request", help='JSON file with {"peacemakers": [...]}')
    parser.add_argument("--kind", choices=[k.value for k in CertificateKind], default=CertificateKind.PEACEMAKING.value)
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level)

    with open(args.request, "r", encoding="utf-8") as f:
        payload = CertificateRequest.model_validate(json.load(f))

    try:
        batch = generate_certificates(CertificateKind(args.kind), payload.peacemakers, settings)
    except CertificateError as err:
        print(f"Error generating certificate for {err.participant}: {err}", file=sys.stderr)
        return 1

    for path in batch.files:
        print(f"PDF saved -> {path}")
    print(f"Tracking identifier: {batch.identifier}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

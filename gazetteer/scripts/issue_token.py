from __future__ import annotations

import argparse
import logging

from gazetteer.core.config import settings
from gazetteer.core.security import sign_token

logger = logging.getLogger("gazetteer.auth")

DEFAULT_SECRET = "CHANGE_ME"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m gazetteer.scripts.issue_token",
        description="Print a bearer token for the write endpoints.",
    )
    parser.add_argument("subject", help="who the token is issued to, e.g. an e-mail address")
    return parser


def main(argv: list[str] | None = None) -> int:
    #   python -m gazetteer.scripts.issue_token admin@example.com
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    subject = args.subject.strip()
    if not subject:
        logger.error("Subject must not be empty")
        return 1
    if settings.SECRET_KEY == DEFAULT_SECRET and settings.ENV != "dev":
        logger.error("SECRET_KEY is still the default; refusing to issue a token for ENV=%s", settings.ENV)
        return 1

    print(sign_token(subject))
    logger.info("Issued token for %s, valid %ss", subject, settings.TOKEN_MAX_AGE_SECONDS)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

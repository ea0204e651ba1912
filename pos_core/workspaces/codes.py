# pos_core/workspaces/codes.py
"""
Workspace code generation.

Code = slug of the company name (lowercase, ASCII, hyphenated).
Collisions get a numeric suffix: acme-corp, acme-corp-2, acme-corp-3, ...
A code is "taken" if a workspace already uses it or if the role code derived
from it ({code}-admin) already exists, compared case-insensitively.
"""
from __future__ import annotations

import hashlib
from typing import Iterator

from django.conf import settings
from django.utils.text import slugify

from pos_core.workspaces.models import Workspace

MAX_CODE_LENGTH = 50
FALLBACK_CODE_PREFIX = "company"


def base_code(company_name: str) -> str:
    """
    Names with letters but nothing ASCII-sluggable ("株式会社") get a stable
    `company-<hash>` code; names with no letters or digits at all get "".
    """
    name = (company_name or "").strip()
    slug = slugify(name)[:MAX_CODE_LENGTH].strip("-")
    if slug or not any(ch.isalnum() for ch in name):
        return slug
    digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:8]
    return f"{FALLBACK_CODE_PREFIX}-{digest}"


def role_code_for(workspace_code: str) -> str:
    return f"{workspace_code}-admin"


def reserved_codes() -> set[str]:
    return {c.lower() for c in getattr(settings, "POS_RESERVED_WORKSPACE_CODES", [])}


def candidate_codes(base: str, max_attempts: int | None = None) -> Iterator[str]:
    if max_attempts is None:
        max_attempts = getattr(settings, "POS_WORKSPACE_CODE_MAX_ATTEMPTS", 20)
    yield base
    for n in range(2, max_attempts + 1):
        yield f"{base}-{n}"


def is_code_taken(code: str) -> bool:
    from pos_core.iam.models import Role

    if code.lower() in reserved_codes():
        return True
    if Workspace.objects.filter(code__iexact=code).exists():
        return True
    return Role.objects.filter(code__iexact=role_code_for(code)).exists()


def first_available_code(company_name: str, *, skip: set[str] | None = None) -> str | None:
    base = base_code(company_name)
    if not base:
        return None

    skip = skip or set()
    for candidate in candidate_codes(base):
        if candidate in skip:
            continue
        if not is_code_taken(candidate):
            return candidate
    return None

"""Converters from structured descriptors to tag values."""

from __future__ import annotations

import dataclasses
import hashlib
import os
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from .assertions import assert_that
from .errors import ValidationError
from .logging import get_logger
from .models import HashType, ResourceDescriptor, UserDescriptor, enum_value

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .generator import GeneratorOptions

AUTO_HASH = "auto"
BYTES_PER_READ = 8192

_logger = get_logger("converters")


def to_signature(user: UserDescriptor) -> str:
    """Format a user as ``name [email] <url>``."""
    signature = user.name
    if user.email is not None:
        signature += f" [{user.email}]"
    if user.url is not None:
        signature += f" <{user.url}>"
    return signature


def resolve_path(file_name: Union[str, Path]) -> Path:
    """Return ``file_name`` as an absolute path, relative to the working directory."""
    path = Path(file_name)
    if path.is_absolute():
        return path
    return Path(os.getcwd()) / path


def _hash_algorithm(algorithm: Union[HashType, str]) -> str:
    name = enum_value(algorithm)
    try:
        return HashType(name).value
    except ValueError:
        raise ValidationError(f'Hash algorithm "{name}" is not supported.') from None


def hash_file(
    path: Union[str, Path],
    algorithm: Union[HashType, str],
    chunk_size: int = BYTES_PER_READ,
) -> str:
    """Return the hex digest of the file at ``path``, read in ``chunk_size`` blocks."""
    digest = hashlib.new(_hash_algorithm(algorithm))
    with Path(path).open("rb") as handle:
        for chunk in iter(lambda: handle.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()


def to_hash_fragment(hash_value: str, algorithm: Union[HashType, str]) -> str:
    return f"{_hash_algorithm(algorithm)}={hash_value}"


def resolve_resource_url(
    descriptor: ResourceDescriptor,
    options: Optional["GeneratorOptions"] = None,
) -> str:
    """Compute the final URL of a resource, including its integrity hash fragment.

    ``src`` and ``url`` fall back to the resolver callbacks in ``options``. A
    ``"auto"`` hash is computed from the resolved ``src``. A fragment already
    present on the URL is kept after the hash, separated by ``;``.
    """
    hash_fragment: Optional[str] = None

    source = descriptor.src
    if source is None and options is not None and options.resolve_resource_src is not None:
        source = options.resolve_resource_src(descriptor)

    # Callbacks only ever see a copy carrying the resolved source.
    descriptor = dataclasses.replace(descriptor, src=source)

    if descriptor.hash is not None:
        hash_value, algorithm = descriptor.hash
        if hash_value == AUTO_HASH:
            assert_that(
                source is not None,
                'Resource "%s" has "hash" set to "auto", but its "src" is null and cannot be resolved.',
                descriptor.id,
            )
            path = resolve_path(source)  # type: ignore[arg-type]
            _logger.debug("Hashing %s for resource %s", path, descriptor.id)
            hash_value = hash_file(path, algorithm)
        hash_fragment = to_hash_fragment(hash_value, algorithm)

    url = descriptor.url
    if url is None and options is not None and options.resolve_resource_url is not None:
        url = options.resolve_resource_url(descriptor)

    assert_that(
        url is not None,
        'Resource "%s" has no "url" set and it cannot be resolved.',
        descriptor.id,
    )

    actual_url, separator, fragment_part = url.partition("#")  # type: ignore[union-attr]
    if separator:
        hash_fragment = f"{hash_fragment};{fragment_part}" if hash_fragment else fragment_part

    return f"{actual_url}#{hash_fragment}" if hash_fragment else actual_url


__all__ = [
    "AUTO_HASH",
    "BYTES_PER_READ",
    "hash_file",
    "resolve_path",
    "resolve_resource_url",
    "to_hash_fragment",
    "to_signature",
]

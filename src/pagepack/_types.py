"""Shared type definitions for pagepack."""

from collections.abc import Callable, Mapping
from typing import Literal, TypeAlias

# Build mode passed in by the invoker
BuildMode: TypeAlias = Literal["development", "production"]

# Zero-argument callable producing a complete HTML document
RenderFunc: TypeAlias = Callable[[], str]

# Environment variables consulted while assembling a build
Environment: TypeAlias = Mapping[str, str]

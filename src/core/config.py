"""Runtime configuration model for SLCSP runs.

This module owns input/output path resolution and validation.
Other modules consume a typed config object instead of raw CLI values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import (
    DEFAULT_PLANS_FILE_NAME,
    DEFAULT_TARGETS_FILE_NAME,
    DEFAULT_ZIPS_FILE_NAME,
)
from core.errors import SlcspConfigError


@dataclass(frozen=True)
class SlcspConfig:
    """Validated runtime configuration.

    Attributes:
        plans_path: Plan catalog table.
        zips_path: ZIP to rate area mapping table.
        targets_path: Target ZIP list to resolve.
        output_path: Destination for the resolved table.
        strict: Abort on the first malformed reference row instead of skipping.
    """

    plans_path: Path
    zips_path: Path
    targets_path: Path
    output_path: Path
    strict: bool = False

    @classmethod
    def from_paths(
        cls,
        plans_path: str | Path | None = None,
        zips_path: str | Path | None = None,
        targets_path: str | Path | None = None,
        output_path: str | Path | None = None,
        strict: bool = False,
        base_dir: Path | None = None,
    ) -> "SlcspConfig":
        """Build config from optional paths, applying default file names.

        Args:
            plans_path: Optional plan catalog path.
            zips_path: Optional ZIP mapping path.
            targets_path: Optional target list path.
            output_path: Optional output path; defaults to the target list,
                which is then rewritten in place.
            strict: Strict malformed-row policy.
            base_dir: Directory that relative paths resolve against.

        Returns:
            A config object with absolute paths.
        """
        root = base_dir if base_dir is not None else Path.cwd()
        targets = _resolve_path(root, targets_path, DEFAULT_TARGETS_FILE_NAME)
        return cls(
            plans_path=_resolve_path(root, plans_path, DEFAULT_PLANS_FILE_NAME),
            zips_path=_resolve_path(root, zips_path, DEFAULT_ZIPS_FILE_NAME),
            targets_path=targets,
            output_path=_resolve_path(root, output_path, str(targets)),
            strict=strict,
        )

    def validate(self) -> None:
        """Check paths before any work starts.

        Raises:
            SlcspConfigError: If an input is not a file or the output is a directory.
        """
        for label, path in (
            ("plans", self.plans_path),
            ("zips", self.zips_path),
            ("targets", self.targets_path),
        ):
            if path.exists() and not path.is_file():
                raise SlcspConfigError(
                    f"Invalid {label} input at {path}: expected a file, got a directory. "
                    "Point the input at a delimited table file."
                )
        if self.output_path.is_dir():
            raise SlcspConfigError(
                f"Invalid output path {self.output_path}: path is a directory. "
                "Provide a file path for the result table."
            )


def _resolve_path(root: Path, value: str | Path | None, default: str) -> Path:
    raw_path = Path(value if value is not None else default).expanduser()
    if not raw_path.is_absolute():
        raw_path = root / raw_path
    return raw_path.resolve()

"""pagepack configuration.

ProjectConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Configuration for a pagepack project.

    Attributes:
        root: Path to the project root (contains src/, public/, etc.).
              Always resolved to an absolute path on construction.
        src_dir: Source root; style imports are written relative to it.
        pages_dir: Directory containing page modules.
        public_dir: Directory holding static files served and copied as-is.
        output: Build output directory.
        entry: Bundle entry module, relative to ``src_dir``.
        styles_file: Generated style-aggregation file, relative to ``src_dir``.
        style_extension: File extension identifying style fragments.
        copy_folders: Folder names under ``public_dir`` copied into the output.
        dev_port: Port for the development server.
        api_url_default: ``API_URL`` value used when the environment has none.

    """

    root: Path = field(default_factory=Path.cwd)
    src_dir: str = "src"
    pages_dir: str = "src/pages"
    public_dir: str = "public"
    output: Path = field(default_factory=lambda: Path("build"))
    entry: str = "app.js"
    styles_file: str = "styles.js"
    style_extension: str = ".pcss"
    copy_folders: tuple[str, ...] = ("assets",)
    dev_port: int = 8888
    api_url_default: str = "http://localhost:8888"

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not isinstance(self.copy_folders, tuple):
            object.__setattr__(self, "copy_folders", tuple(self.copy_folders))

    @property
    def src_path(self) -> Path:
        """Absolute path to the source root."""
        return self.root / self.src_dir

    @property
    def pages_path(self) -> Path:
        """Absolute path to the page modules directory."""
        return self.root / self.pages_dir

    @property
    def public_path(self) -> Path:
        """Absolute path to the public directory."""
        return self.root / self.public_dir

    @property
    def entry_path(self) -> Path:
        """Absolute path to the bundle entry module."""
        return self.src_path / self.entry

    @property
    def styles_path(self) -> Path:
        """Absolute path to the generated styles file."""
        return self.src_path / self.styles_file

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

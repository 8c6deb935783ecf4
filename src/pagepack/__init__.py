"""pagepack — a static-site build orchestrator.

Discovers page modules and style fragments, keeps a generated styles
entry in sync, and assembles the configuration handed to a bundler.

Quick start::

    import pagepack

    pagepack.build("my-site/")

Entry points::

    pagepack.build("my-site/")                    # Render pages and copy assets
    pagepack.dev("my-site/")                      # Rebuild on every change
    pagepack.assemble("production", os.environ)   # Just the config

"""

__version__ = "0.1.0"
__all__ = [
    "ProjectConfig",
    "__version__",
    "assemble",
    "build",
    "dev",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pagepack`` fast while providing a clean top-level API.
    """
    if name == "ProjectConfig":
        from pagepack.config import ProjectConfig

        return ProjectConfig

    if name == "assemble":
        from pagepack.bundle.assembler import assemble

        return assemble

    if name == "build":
        from pagepack.app import build

        return build

    if name == "dev":
        from pagepack.app import dev

        return dev

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

from .container import Container, build_container, build_filesystem, build_pool

__all__ = ["Container", "build_container", "build_filesystem", "build_pool"]

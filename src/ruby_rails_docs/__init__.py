"""ruby-rails-docs - merged Ruby and Rails API documentation builder."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("ruby-rails-docs")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "0.1.0"

from ruby_rails_docs.core.generator import GenerationRequest, RubyRailsDocumentations

__all__ = ["__version__", "GenerationRequest", "RubyRailsDocumentations"]

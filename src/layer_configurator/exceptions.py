"""Exception classes for Layer Configurator.

Parsers raise these; Configuration.load() and Configuration.save() catch them
at the boundary and report a boolean result instead.
"""

from pathlib import Path
from typing import Optional, Union


class LayerConfiguratorError(Exception):
    """Base exception class for all Layer Configurator errors."""

    def __init__(self, message: str, component: Optional[str] = None, context: Optional[dict] = None):
        """Initialize an error.

        Args:
            message: The error message
            component: The component where the error occurred
            context: Additional context information
        """
        super().__init__(message)
        self.component = component
        self.context = context or {}

    def __str__(self):
        base_msg = super().__str__()
        if self.component:
            base_msg = f"[{self.component}] {base_msg}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg = f"{base_msg} (Context: {context_str})"

        return base_msg


class ConfigurationFormatError(LayerConfiguratorError):
    """A configuration document does not match the layout of its format version."""

    def __init__(self, message: str, path: Union[str, Path, None] = None, **kwargs):
        context = kwargs.get("context", {})
        if path is not None:
            context["path"] = str(path)

        super().__init__(message, component="FileFormat", context=context)
        self.path = path


class ConfigurationIOError(LayerConfiguratorError):
    """A configuration file could not be read or written."""

    def __init__(self, message: str, path: Union[str, Path, None] = None, **kwargs):
        context = kwargs.get("context", {})
        if path is not None:
            context["path"] = str(path)

        super().__init__(message, component="Storage", context=context)
        self.path = path


class UnknownLayerError(LayerConfiguratorError):
    """A parameter refers to a layer that is not registered."""

    def __init__(self, layer_key: str, **kwargs):
        context = kwargs.get("context", {})
        context["layer"] = layer_key

        super().__init__(f"Layer is not registered: {layer_key}", component="Layer", context=context)
        self.layer_key = layer_key

"""Base class for terminal scene animations."""

from typing import Any, Dict, Tuple


class AnimationBase:
    """Common parameter handling shared by every animation plugin."""

    ANIMATION_NAME = "Unnamed"
    ANIMATION_DESCRIPTION = ""
    ANIMATION_AUTHOR = "Unknown"
    ANIMATION_VERSION = "1.0"

    def __init__(self, controller, config: Dict[str, Any] = None):
        self.controller = controller
        self.config = dict(config or {})
        self.default_params: Dict[str, Any] = {
            'speed': 1.0,
        }
        self.params = {**self.default_params, **self.config}

    def get_parameter_schema(self) -> Dict[str, Dict[str, Any]]:
        return {
            'speed': {
                'type': 'float',
                'min': 0.1,
                'max': 5.0,
                'default': 1.0,
                'description': 'Animation speed multiplier'
            },
        }

    def update_parameters(self, params: Dict[str, Any]):
        """Update animation parameters."""
        self.params.update(params)

    def get_grid_info(self) -> Tuple[int, int]:
        """Current (width, height) of the controller in cells."""
        width, height = self.controller.size()
        return max(0, int(width)), max(0, int(height))

    def get_plugin_info(self) -> Dict[str, Any]:
        return {
            'name': self.ANIMATION_NAME,
            'description': self.ANIMATION_DESCRIPTION,
            'author': self.ANIMATION_AUTHOR,
            'version': self.ANIMATION_VERSION,
            'parameters': self.get_parameter_schema(),
            'current_params': dict(self.params),
        }

    def generate_frame(self, state):
        raise NotImplementedError

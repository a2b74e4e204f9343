from types import ModuleType

from src.service.reading_room.app.command import user_command_use_case
from src.service.reading_room.driving_adapter.http_controller import user_controller
from src.service.reading_room.driving_adapter.http_controller.auth import role_auth


# Modules that use Provide[Container.*], wired by main.py and the API test client
WIRE_MODULES: list[ModuleType] = [
    user_command_use_case,
    role_auth,
    user_controller,
]

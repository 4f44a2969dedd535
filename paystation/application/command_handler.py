"""
Command Handler - Routes Redis commands to service methods.

Provides command routing with argument validation and error handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from paystation.loggers import logger


# Type alias for command handlers
CommandHandlerFunc = Callable[..., Awaitable[dict[str, Any]]]


@dataclass
class CommandResponse:
    """
    Standardized response for command execution.

    Attributes:
        command_id: The ID of the executed command.
        success: Whether the command succeeded.
        message: Human-readable message.
        data: Optional response data.
    """

    command_id: Optional[int] = None
    success: bool = False
    message: Optional[str] = None
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the response to a dictionary."""
        return {
            "command_id": self.command_id,
            "success": self.success,
            "message": self.message,
            "data": self.data,
        }


@dataclass
class CommandDefinition:
    """
    Definition of a command.

    Attributes:
        name: Command name.
        handler: Handler function.
        required_args: List of required argument names.
        description: Human-readable description.
    """

    name: str
    handler: CommandHandlerFunc
    required_args: list[str]
    description: str = ""


class CommandHandler:
    """
    Routes commands to their handlers on the pay station service.
    """

    def __init__(self, service: Any) -> None:
        """
        Initialize the command handler.

        Args:
            service: The PayStationService instance.
        """
        self._service = service
        self._commands: dict[str, CommandDefinition] = {}
        self._register_default_commands()

    def _register_default_commands(self) -> None:
        """Register all default command handlers."""
        # Transaction
        self.register(
            "add_payment",
            self._service.add_payment,
            ["coin_value"],
            "Insert a coin of 5, 10 or 25",
        )
        self.register(
            "read_display",
            self._service.read_display,
            [],
            "Read the parking minutes bought so far",
        )
        self.register(
            "buy",
            self._service.buy,
            [],
            "Finish the transaction and issue a receipt",
        )
        self.register(
            "cancel",
            self._service.cancel,
            [],
            "Cancel the transaction and return the coins",
        )

        # Administration
        self.register(
            "empty",
            self._service.empty,
            [],
            "Empty the money store",
        )
        self.register(
            "status",
            self._service.status,
            [],
            "Get pay station status",
        )

    def register(
        self,
        command_name: str,
        handler: CommandHandlerFunc,
        required_args: list[str],
        description: str = "",
    ) -> None:
        """
        Register a command handler.

        Args:
            command_name: The name of the command.
            handler: The async handler function.
            required_args: List of required argument names.
            description: Human-readable description.
        """
        self._commands[command_name] = CommandDefinition(
            name=command_name,
            handler=handler,
            required_args=required_args,
            description=description,
        )

    def get_available_commands(self) -> list[dict[str, Any]]:
        """Get list of available commands with their descriptions."""
        return [
            {
                "name": cmd.name,
                "required_args": cmd.required_args,
                "description": cmd.description,
            }
            for cmd in self._commands.values()
        ]

    async def execute(self, command_data: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a command based on command data.

        Args:
            command_data: Dictionary containing 'command', 'command_id', and 'data'.

        Returns:
            Response dictionary with execution result.
        """
        command = command_data.get("command")
        command_id = command_data.get("command_id")
        data = command_data.get("data", {}) or {}

        response = CommandResponse(command_id=command_id)

        if not isinstance(command, str) or command not in self._commands:
            logger.warning(f"Unknown command: {command}")
            response.message = f"Unknown command: {command}"
            return response.to_dict()

        if not isinstance(data, dict):
            logger.warning(f"Command '{command}' data is not an object: {data!r}")
            response.message = "Command data must be an object"
            return response.to_dict()

        definition = self._commands[command]

        kwargs = {arg: data.get(arg) for arg in definition.required_args}
        missing = [arg for arg, value in kwargs.items() if value is None]
        if missing:
            response.message = f"Missing required arguments: {missing}"
            return response.to_dict()

        try:
            result = await definition.handler(**kwargs)
        except Exception as e:
            logger.error(f"Error executing command '{command}': {e}")
            response.message = f"Error: {e}"
            return response.to_dict()

        if isinstance(result, dict):
            response.success = result.get("success", False)
            response.message = result.get("message")
            response.data = result.get("data")
        else:
            response.success = True
            response.data = result

        return response.to_dict()


async def pay_station_commands(
    command_data: dict[str, Any],
    service: Any,
) -> dict[str, Any]:
    """
    Execute a command on the pay station service.

    This is the entry point for command execution from Redis pub/sub.

    Args:
        command_data: Dictionary containing command name, ID, and data.
        service: The PayStationService instance.

    Returns:
        Response dictionary with execution result.
    """
    handler = CommandHandler(service)
    return await handler.execute(command_data)

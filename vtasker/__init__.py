"""vTasker: task, issue and project management backend, gateway and client."""

__version__ = "0.1.0"

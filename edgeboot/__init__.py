"""Bootstrap building blocks for edge microservices: configuration, DI, timers, map helpers and secrets."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "di",
    "timer",
    "maputils",
    "insecure",
    "jwtauth",
    "servicesecrets",
    "logadapter",
]
"""Non-blocking I/O building blocks: TCP and file processors, a logger and a CGI program."""

__version__ = "0.1.0"
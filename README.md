# webserv

These are building blocks for a small, single-threaded HTTP server. All of its
I/O is non-blocking. A main loop polls every processor, and no processor waits
on a socket or a file.

## What is inside

- `webserv.ioprocessor` provides `IOProcessor`, the base of all event-driven
  processors.
  - It keeps a read buffer and a write buffer for each descriptor.
  - `IOProcessor.do_all_tasks()` runs one round on every live processor.
  - `IOProcessor.blocking_write_all()` keeps running them until their output
    is drained.
  - A processor can be used as a context manager. `close()` removes it from
    the registry.
- `webserv.singleio` provides `SingleIOProcessor`.
  - It wraps one descriptor, for example standard output.
  - `IOOption` chooses reading, writing or both.
  - `write()` queues data, `read()` returns and clears what has arrived, and
    `write_done()` says whether the output is flushed.
- `webserv.tcpio` provides `TCPIOProcessor`.
  - It listens on a port and accepts clients.
  - It keeps a read buffer and a write buffer for each client. Reach them with
    `read_buffer(fd)` and `write_buffer(fd)`.
  - Iterating over it yields the descriptors of the connected clients in
    ascending order.
  - Clients that have gone away are queued on `disconnected_clients`.
  - `finalize()` drops every client and closes the listening socket.
- `webserv.fileio` provides `FileReader` and `FileWriter`.
  - They load or store a whole file step by step. The target is a path or an
    open descriptor.
  - Each call to `task()` returns a `Status`.
  - A handler fails with `Status.ERROR_TIMEOUT` once it has been idle for
    longer than its timeout. A timeout of 0 ms turns this off.
  - `retrieve()` returns the bytes that were read.
- `webserv.logger` provides `Logger`, a named logger with the levels in
  `LogLevel` and coloured prefixes.
  - It writes through non-blocking processors registered with
    `Logger.register_fd()`.
  - `Logger.set_log_level()` sets the level. It accepts a `LogLevel`, an int,
    or the start of a level name such as `"DEB"`.
- `webserv.status` provides the `Status` codes, with `Status.is_error`, and
  the functions that build the error messages.
- `webserv.bidimap` provides `BidiMap`, a mapping that can be looked up by key
  (`value_of`) or by value (`key_of`).
- `webserv.strutil`, `webserv.hashing` and `webserv.fileutil` hold helpers.
  They handle string parsing and number conversion, 16-character hex hashes
  (`generate_hash`), and directory and file-size checks.

## Example: an echo server

```python
from webserv.ioprocessor import IOProcessor
from webserv.tcpio import TCPIOProcessor

listener = TCPIOProcessor(8080, 8, "127.0.0.1")
while True:
    IOProcessor.do_all_tasks()
    for fd in listener:
        incoming = listener.read_buffer(fd)
        if incoming:
            listener.write_buffer(fd).extend(incoming)
            incoming.clear()
```

## Example: reading a file

```python
from webserv.fileio import FileReader
from webserv.status import Status

with FileReader(0, "index.html", False) as reader:
    status = reader.task()
    while status is Status.OK_AGAIN:
        status = reader.task()
    if status.is_error:
        raise OSError(reader.error_msg)
    print(reader.retrieve().decode())
```

## Logging

```python
import sys
from webserv.logger import Logger, LogLevel

Logger.register_fd(sys.stdout.fileno())
Logger.set_log_level(LogLevel.DEBUG)
log = Logger.get_logger("root")
log.info("Hello, World! ", 3)
Logger.blocking_write_all()
```

## The fortune-cookie CGI program

`webserv.fortune` is a small CGI program. It reads `REQUEST_METHOD` and
`QUERY_STRING` from the environment.

- For a `GET` request it prints a page that greets the visitor named by the
  `name` query parameter and shows a random fortune.
- For any other method it prints an error page with status 600.

`respond()` builds the same output from any mapping of meta-variables. You can
also give it a list of fortunes and a `random.Random`.

```sh
REQUEST_METHOD=GET QUERY_STRING="name=Alice" webserv-fortune
```

## What this package does not do

This package does not contain an HTTP server. It has none of the following:

- an HTTP request parser
- response builder
- configuration-file reader
- CGI runner
- a command that starts serving

`TCPIOProcessor` moves raw bytes to and from clients. Turning those bytes into
HTTP requests and responses is left to the code that drives it.

## Tests

```sh
pip install -e ".[test]"
pytest
```
import socket, socketserver, threading, time

import pytest
from werkzeug.serving import make_server

from httpaddr import parse
from local_title_server import app


class CannedHandler(socketserver.StreamRequestHandler):
    """Record the raw request, answer with the next canned response and close"""

    def handle(self):
        head = []
        length = 0
        while True:
            line = self.rfile.readline()
            if not line or line in (b'\r\n', b'\n'):
                break
            head.append(line)
            if line.lower().startswith(b'content-length:'):
                length = int(line.split(b':', 1)[1])
        body = self.rfile.read(length) if length else b''
        self.server.requests.append(b''.join(head) + b'\r\n' + body)
        if self.server.on_request:
            self.server.on_request()

        if self.server.stall:
            self.server.release.wait(5)
            return
        responses = self.server.responses
        response = responses.pop(0) if len(responses) > 1 else responses[0]
        try:
            if self.server.drip:
                for line in response.splitlines(keepends=True):
                    self.wfile.write(line)
                    time.sleep(self.server.drip)
            else:
                self.wfile.write(response)
        except OSError:
            # client stopped reading early
            pass


class CannedServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(self):
        super().__init__(('127.0.0.1', 0), CannedHandler)
        self.requests = []
        self.responses = [b"HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n<title>Canned</title>\r\n"]
        self.stall = False
        self.on_request = None
        self.drip = None
        self.release = threading.Event()

    @property
    def port(self):
        return self.server_address[1]

    def address(self, path='/'):
        return parse(f"http://127.0.0.1:{self.port}{path}")


@pytest.fixture
def canned():
    server = CannedServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.release.set()
    server.shutdown()
    server.server_close()


@pytest.fixture(scope='session')
def site():
    server = make_server('127.0.0.1', 0, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_port}"
    server.shutdown()


@pytest.fixture
def closed_port():
    with socket.socket() as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]

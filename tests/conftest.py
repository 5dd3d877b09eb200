import pytest
import threading
import logging
from contextlib import contextmanager

from wsgiref.simple_server import make_server
from wsgiref.simple_server import WSGIRequestHandler

log = logging.getLogger(__name__)


class QuietHandler(WSGIRequestHandler):
    def log_request(self, *args):
        pass


@pytest.fixture
def serve():
    @contextmanager
    def _serve(app):
        # port 0 lets the OS pick a free port
        server = make_server('localhost', 0, app, handler_class=QuietHandler)
        server.timeout = 5
        try:
            worker = threading.Thread(target=server.serve_forever, daemon=True)
            worker.start()
            server.url = "http://localhost:%d" % server.server_port
            log.debug("server started on %s", server.url)

            yield server
        finally:
            log.debug("shutting server down")
            server.shutdown()
            server.server_close()
            worker.join(1)
            if worker.is_alive():
                log.warning('worker is hanged')
            else:
                log.debug("server stopped")

    return _serve

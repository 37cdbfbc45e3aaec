import json
import logging
from functools import partial
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from .errors import MalformedInputError, PersistenceError, SchemeSyncError
from .writer import SchemeDocument, parse_edit_payload

logger = logging.getLogger(__name__)

SAVE_PATH = '/save'


class EditorRequestHandler(SimpleHTTPRequestHandler):
    """
    Serves the editor page and the output directory, and applies POST /save to the scheme.
    """

    def __init__(self, *args, document: SchemeDocument, index='theme-editor.html', **kwargs):
        self.document = document
        self.index = index
        super().__init__(*args, **kwargs)

    def do_GET(self):
        if self.path.split('?', 1)[0] == '/':
            self.path = '/' + self.index
        super().do_GET()

    def do_HEAD(self):
        if self.path.split('?', 1)[0] == '/':
            self.path = '/' + self.index
        super().do_HEAD()

    def list_directory(self, path):
        self.send_error(HTTPStatus.NOT_FOUND, "File not found")
        return None

    def do_POST(self):
        if self.path.split('?', 1)[0] != SAVE_PATH:
            self.send_json(HTTPStatus.NOT_FOUND, {'success': False, 'error': 'Not Found'})
            return

        try:
            edit_set = parse_edit_payload(self.read_json())
        except MalformedInputError as e:
            logger.warning("Rejected save: %s", e)
            self.send_json(HTTPStatus.BAD_REQUEST, {'success': False, 'error': str(e)})
            return

        try:
            skipped = self.document.save(edit_set)
        except PersistenceError as e:
            logger.error("Save failed: %s", e)
            self.send_json(HTTPStatus.INTERNAL_SERVER_ERROR, {'success': False, 'error': str(e)})
            return

        self.send_json(HTTPStatus.OK, {'success': True, 'skipped': skipped})

    def read_json(self):
        try:
            length = int(self.headers.get('Content-Length', 0))
        except ValueError as e:
            raise MalformedInputError("Invalid Content-Length") from e
        body = self.rfile.read(length) if length > 0 else b''
        try:
            return json.loads(body.decode('utf-8'))
        except ValueError as e:
            raise MalformedInputError(f"Body is not valid JSON: {e}") from e

    def send_json(self, status, payload):
        body = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def make_server(document: SchemeDocument, directory, host='127.0.0.1', port=3000,
                index='theme-editor.html') -> ThreadingHTTPServer:
    handler = partial(EditorRequestHandler, document=document, index=index, directory=str(directory))
    return ThreadingHTTPServer((host, port), handler)


def serve(config):
    document = SchemeDocument(config.paths.scheme, lock_timeout=config.editor.lock_timeout)
    try:
        httpd = make_server(document, config.paths.output, config.editor.host, config.editor.port,
                            index=Path(config.editor_html).name)
    except OSError as e:
        raise SchemeSyncError(f"Could not listen on {config.editor.host}:{config.editor.port}: {e}") from e
    host, port = httpd.server_address[:2]
    print(f"Theme editor running at http://{host}:{port}/")
    print(f"Saving to {config.paths.scheme}")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        httpd.server_close()

"""
Transfer server

HTTP API for pulling/pushing files and reading/writing the clipboard:

    GET  /               liveness probe
    GET  /file/<token>   download the file whose path is encoded in token
    POST /file           multipart upload into the download directory
    GET  /clipboard      current clipboard as image, file tokens or text
    POST /clipboard      set clipboard text (form field 'clipboard')

Every request runs on its own thread. Failures inside a handler become a
500 JSON envelope {"success": false, "msg": "..."} and a desktop
notification; they never stop the server.
"""
import base64
import logging
import mimetypes
import socket
import threading
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from flask import Flask, Request, Response, jsonify, request, send_file
from werkzeug.formparser import FormDataParser
from werkzeug.serving import make_server

from airdroppro import config
from airdroppro.common import pathcodec
from airdroppro.common.clipboard import ClipboardBridge, FileListPayload, ImagePayload, TextPayload
from airdroppro.common.errors import DecodeError, RequestError, ServerStartError, TransferError
from airdroppro.common.filenamer import unique_path
from airdroppro.common.notifications import Notifier
from airdroppro.common.user_config import ServiceConfig

logger = logging.getLogger(__name__)

GREETING = "Hello World!"
DEFAULT_MIMETYPE = "application/octet-stream"


def client_filename(name: str) -> str:
    """Final path component of a client-supplied file name ('/' or '\\' separated)"""
    return name.replace('\\', '/').rsplit('/', 1)[-1]


def content_disposition(filename: str) -> str:
    return f"attachment; filename*=UTF-8''{quote(filename, safe='')}"


class StrictFormDataParser(FormDataParser):
    """Raises ValueError on a malformed body instead of returning empty forms"""

    def __init__(self, *args, **kwargs):
        kwargs['silent'] = False
        super().__init__(*args, **kwargs)


class TransferRequest(Request):
    form_data_parser_class = StrictFormDataParser


class TransferServer:
    """
    Flask application plus the threaded listener serving it.

    Collaborators are passed in so the handlers can be exercised with
    Flask's test client and a fake clipboard.
    """

    def __init__(self, service_config: ServiceConfig, bridge: ClipboardBridge, notifier: Notifier):
        self.config = service_config
        self.bridge = bridge
        self.notifier = notifier

        # Naming + exclusive creation of upload targets is serialized
        self._upload_lock = threading.Lock()

        self._server = None
        self._thread: Optional[threading.Thread] = None

        self.app = self._create_app()

    def _create_app(self) -> Flask:
        app = Flask(__name__)
        app.request_class = TransferRequest

        app.before_request(self._log_request)

        routes = [
            ('/', 'index', self.index, 'GET'),
            ('/file/<token>', 'get_file', self._guarded(self.get_file), 'GET'),
            ('/file', 'post_file', self._guarded(self.post_file), 'POST'),
            ('/clipboard', 'get_clipboard', self._guarded(self.get_clipboard), 'GET'),
            ('/clipboard', 'post_clipboard', self._guarded(self.post_clipboard), 'POST'),
        ]
        for rule, endpoint, view, method in routes:
            app.add_url_rule(rule, endpoint, view, methods=[method],
                             provide_automatic_options=False)

        # Unknown paths, wrong methods and OPTIONS all get an empty 404
        app.register_error_handler(404, self.not_found)
        app.register_error_handler(405, self.not_found)

        return app

    # ── request plumbing ─────────────────────────────────────────────

    def _log_request(self):
        logger.info(f"Received request: {request.method} {request.url} from {request.remote_addr}")

    def _guarded(self, handler):
        """Turn any exception raised by handler into the error envelope"""
        def view(**kwargs):
            try:
                return handler(**kwargs)
            except Exception as e:
                return self.failed(e)
        view.__name__ = handler.__name__
        return view

    def failed(self, err: Exception):
        user_msg = str(err)
        logger.error(f"Error: {user_msg}", exc_info=err)
        self.notifier.failure(user_msg)
        return jsonify(success=False, msg=f"{user_msg}."), 500

    def not_found(self, err):
        return Response(status=404)

    # ── handlers ─────────────────────────────────────────────────────

    def index(self):
        return Response(GREETING, mimetype='text/plain')

    def get_file(self, token: str):
        try:
            filepath = Path(pathcodec.decode(token))
        except DecodeError as e:
            raise TransferError("Failed to decode the URL path") from e

        filename = filepath.name
        if not filename:
            raise TransferError(f"Failed to extract filename from path: {filepath}")

        try:
            file = open(filepath, 'rb')
        except OSError as e:
            raise TransferError(f"Failed to open the file at path: {filepath}") from e

        mimetype = mimetypes.guess_type(filename)[0] or DEFAULT_MIMETYPE
        response = send_file(file, mimetype=mimetype)
        response.headers['Content-Disposition'] = content_disposition(filename)

        self.notifier.success(f"Successfully served file from path: {filepath}")
        return response

    def post_file(self):
        if request.mimetype != 'multipart/form-data':
            raise RequestError("Failed to parse multipart input")
        try:
            parts = list(request.files.items(multi=True))
        except ValueError as e:
            raise RequestError("Failed to parse multipart input") from e

        for _field, storage in parts:
            original_filename = storage.filename
            if not original_filename:
                continue
            destination = self._store_upload(original_filename, storage)
            self.notifier.success(
                f"Successfully uploaded file '{original_filename}' to path: {destination}"
            )

        return jsonify(success=True)

    def _store_upload(self, original_filename: str, storage) -> Path:
        name = client_filename(original_filename)
        if name in ('', '.', '..'):
            raise TransferError(f"Invalid file name: {original_filename!r}")

        root = self.config.root_directory
        with self._upload_lock:
            try:
                destination = unique_path(root, name)
            except OSError as e:
                raise TransferError(f"Failed to create unique filepath in directory: {root}") from e
            try:
                target = open(destination, 'xb')
            except OSError as e:
                raise TransferError(f"Failed to create a new file at: {destination}") from e

        try:
            with target:
                storage.save(target, buffer_size=config.CHUNK_SIZE)
        except OSError as e:
            destination.unlink(missing_ok=True)
            raise TransferError(f"Failed to write data to file: {destination}") from e

        return destination

    def get_clipboard(self):
        payload = self.bridge.read()

        if isinstance(payload, ImagePayload):
            data = base64.b64encode(payload.png_bytes).decode('ascii')
            self.notifier.success("Successfully served clipboard content as an image")
        elif isinstance(payload, FileListPayload):
            data = [pathcodec.encode(p) for p in payload.paths]
            if payload.source == "html":
                self.notifier.success(
                    f"Successfully served clipboard content from HTML with {len(data)} file links"
                )
            else:
                self.notifier.success(
                    f"Successfully served clipboard content as a file list with {len(data)} items"
                )
        elif isinstance(payload, TextPayload):
            data = payload.content
            self.notifier.success(f"Successfully served clipboard content as text: {data!r}")
        else:
            raise TypeError(f"Unknown clipboard payload: {payload!r}")

        return jsonify(success=True, data={"type": payload.type_tag, "data": data})

    def post_clipboard(self):
        try:
            text = request.form.get('clipboard')
        except ValueError as e:
            raise RequestError("Failed to parse POST input") from e
        if text is None:
            raise RequestError("Failed to parse POST input")

        self.bridge.write(text)

        self.notifier.success(f"Successfully set clipboard content with text: {text!r}")
        return jsonify(success=True)

    # ── listener ─────────────────────────────────────────────────────

    def start(self, host: str = config.BIND_HOST):
        """
        Bind the listener and serve on a daemon thread.

        Raises:
            ServerStartError: if the port cannot be bound
        """
        address = (host, self.config.port)
        logger.info(f"Starting server on {host}:{self.config.port}")

        # Bind here so a busy port raises instead of exiting inside werkzeug
        try:
            sock = socket.create_server(address)
        except OSError as e:
            raise ServerStartError(f"Failed to bind {host}:{self.config.port}: {e}") from e

        try:
            self._server = make_server(host, self.config.port, self.app,
                                       threaded=True, fd=sock.fileno())
        finally:
            sock.close()

        self._thread = threading.Thread(
            target=self._server.serve_forever, name="transfer-server", daemon=True
        )
        self._thread.start()
        logger.info(f"Server has been started on port {self.port}")

    @property
    def port(self) -> int:
        if self._server is None:
            return self.config.port
        return self._server.port

    def stop(self):
        """Stop serving and wait for the listener thread"""
        if self._server is None:
            return

        self._server.shutdown()
        self._server.server_close()
        if self._thread:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
        logger.info("Server stopped")

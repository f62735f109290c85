# Copyright Epic Games, Inc. All Rights Reserved.

import socket
import threading
import msgpack
from . import logger
from . import protocol
from .error import ConnectionError, ConnectionTimeoutError, ProtocolError
from .utils import LOCALHOST, DEFAULT_PORT, DEFAULT_TIMEOUT

READ_CHUNK_SIZE = 64 * 1024


class Session:
    """ A single TCP stream to the simulation host. Writes raw bytes out and reads complete msgpack objects back in,
        it has no idea what's inside them.
    """

    def __init__(self, host=LOCALHOST, port=DEFAULT_PORT, timeout=DEFAULT_TIMEOUT):
        self.address = (host, port)
        self.timeout = timeout
        self._unpacker = protocol.new_unpacker()
        logger.info('connecting to {}:{}'.format(host, port))
        try:
            self._socket = socket.create_connection(self.address, timeout=timeout)
        except socket.timeout as e:
            self._socket = None
            raise ConnectionTimeoutError('timed out connecting to {}:{}'.format(host, port)) from e
        except OSError as e:
            self._socket = None
            raise ConnectionError('unable to connect to {}:{} ({})'.format(host, port, e)) from e
        self._socket.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

    @property
    def connected(self):
        return self._socket is not None

    def _ensure_open(self):
        if self._socket is None:
            raise ConnectionError('session to {}:{} is closed'.format(*self.address))

    def send(self, data):
        self._ensure_open()
        try:
            self._socket.sendall(data)
        except socket.timeout as e:
            self.close()
            raise ConnectionTimeoutError('timed out sending to {}:{}'.format(*self.address)) from e
        except OSError as e:
            self.close()
            raise ConnectionError('failed sending to {}:{} ({})'.format(*self.address, e)) from e

    def receive(self):
        """ Blocks until a complete msgpack object has arrived and returns it decoded """
        self._ensure_open()
        while True:
            try:
                return next(self._unpacker)
            except StopIteration:
                pass
            except (msgpack.exceptions.UnpackException, ValueError) as e:
                # the unpacker can't resync after bad bytes, the stream is lost
                self.close()
                raise ProtocolError('malformed response from {}:{} ({})'.format(*self.address, e)) from e

            try:
                data = self._socket.recv(READ_CHUNK_SIZE)
            except socket.timeout as e:
                self.close()
                raise ConnectionTimeoutError('no response from {}:{} within {}s'.format(*self.address, self.timeout)) \
                    from e
            except OSError as e:
                self.close()
                raise ConnectionError('failed reading from {}:{} ({})'.format(*self.address, e)) from e

            if not data:
                self.close()
                raise ConnectionError('connection closed by {}:{}'.format(*self.address))
            self._unpacker.feed(data)

    def close(self):
        if self._socket is None:
            return
        logger.info('closing connection to {}:{}'.format(*self.address))
        try:
            self._socket.close()
        finally:
            self._socket = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class Client:
    """ Calls remote functions on the simulation host, one at a time.

    Every call writes a request envelope, then blocks until the host answers. The answer is checked against the
    request before its result is handed back, see `protocol.validate_response`.
    """
    FUNCNAME_PING = 'ping'

    def __init__(self, server_address=LOCALHOST, server_port=DEFAULT_PORT, timeout=DEFAULT_TIMEOUT):
        self._session = Session(server_address, server_port, timeout)
        # serializes write+read pairs when a client gets shared between threads, no pipelining
        self._lock = threading.Lock()

    @property
    def address(self):
        return self._session.address

    @property
    def connected(self):
        return self._session.connected

    def call(self, method, *args, call_id=0):
        """
        :param method: name of the remote function
        :param args: positional arguments, anything msgpack can pack or an object with `to_msgpack`
        :param call_id: correlation token echoed back by the host
        :return: the result payload exactly as decoded
        """
        request = protocol.pack_request(method, args, call_id)
        with self._lock:
            logger.debug('call {}(id={}) with {} argument(s)'.format(method, call_id, len(args)))
            self._session.send(request)
            response = self._session.receive()

        try:
            return protocol.validate_response(response, method, call_id)
        except ProtocolError as e:
            logger.error('{}. The connection to {}:{} may be out of step'.format(e, *self.address))
            raise

    def ensure_connection(self):
        logger.info('checking connection at {}:{}'.format(*self.address))
        if self.call(Client.FUNCNAME_PING):
            logger.info('connected to {}:{}'.format(*self.address))
            return True
        logger.warn('ping to {}:{} returned false'.format(*self.address))
        return False

    def close(self):
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

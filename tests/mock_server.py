# Copyright Epic Games, Inc. All Rights Reserved.

import socket
import threading
import msgpack
from colosseum.protocol import RESPONSE
import colosseum.utils as utils


class MockFunctions(object):
    def __init__(self):
        # host function names are camelCase, can't all be declared as plain methods
        self.__dict__['armDisarm'] = self._arm_disarm
        self.__dict__['getServerVersion'] = lambda: 1
        self.__dict__['getMinRequiredClientVersion'] = lambda: 1
        self.__dict__['list_functions'] = self._list_functions
        self.__dict__['simGetImage'] = self._get_image
        self.__dict__['simGetVehiclePose'] = self._get_vehicle_pose
        self.__dict__['simSetVehiclePose'] = self._set_vehicle_pose
        self.vehicle_pose = None

    def ping(self):
        return True

    def sum(self, x, y):
        return x + y

    def echo(self, *args):
        return list(args)

    def _arm_disarm(self, arm, vehicle_name):
        if vehicle_name not in ('', 'Drone1'):
            raise LookupError('vehicle not found')
        return arm

    def _get_image(self, camera_name, image_type, vehicle_name, external):
        return b'\x89PNG\xff' if camera_name == '0' else ''

    def _get_vehicle_pose(self, vehicle_name):
        return self.vehicle_pose

    def _set_vehicle_pose(self, pose, ignore_collision, vehicle_name):
        self.vehicle_pose = pose

    def _list_functions(self):
        return ['ping', 'sum', 'echo', 'armDisarm']


class MockServer(object):
    """ Plays the simulation host on a local port. Requests get dispatched to `dispatcher` by method name, unless a
        `responder` is given in which case its return value (request -> response envelope) gets sent back verbatim.
    """

    def __init__(self, port=None, dispatcher=None, responder=None, use_bin_type=True):
        self.dispatcher = dispatcher if dispatcher is not None else MockFunctions()
        self.responder = responder
        # the real host packs byte buffers as msgpack str, use_bin_type=False reproduces that
        self.use_bin_type = use_bin_type
        self.requests = []
        self._stop = threading.Event()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._socket.bind((utils.LOCALHOST, port or 0))
        self._socket.listen(1)
        self._socket.settimeout(0.05)
        self.port = self._socket.getsockname()[1]
        # not serving on the calling thread since it's a blocking loop
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._socket.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                self._handle(conn)

    def _handle(self, conn):
        conn.settimeout(0.05)
        unpacker = msgpack.Unpacker(raw=False)
        while not self._stop.is_set():
            try:
                data = conn.recv(4096)
            except socket.timeout:
                continue
            if not data:
                return
            unpacker.feed(data)
            for request in unpacker:
                self.requests.append(request)
                conn.sendall(msgpack.packb(self._respond(request), use_bin_type=self.use_bin_type))

    def _respond(self, request):
        if self.responder is not None:
            return self.responder(request)
        _, msgid, method, args = request
        func = getattr(self.dispatcher, method, None)
        if func is None:
            return [RESPONSE, msgid, 'unknown function: {}'.format(method), None]
        try:
            return [RESPONSE, msgid, None, func(*args)]
        except Exception as e:
            return [RESPONSE, msgid, str(e), None]

    def close(self):
        self._stop.set()
        self._socket.close()
        self._thread.join(timeout=1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def fixed_response(response):
    """ responder always answering with `response` """
    return lambda request: response


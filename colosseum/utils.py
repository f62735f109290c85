# Copyright Epic Games, Inc. All Rights Reserved.

import math
import argparse
import numpy as np
from .types import Quaternionr

LOCALHOST = '127.0.0.1'
DEFAULT_PORT = 41451
# None means "block until the host answers", same as the simulator's own clients
DEFAULT_TIMEOUT = None


def string_to_uint8_array(data):
    """ Converts an image payload (as returned by simGetImage) into a flat numpy uint8 array.
        The host sends image buffers as msgpack strings, those reach us as surrogate-escaped str.
    """
    if type(data) == str:
        data = data.encode('utf-8', 'surrogateescape')
    return np.frombuffer(data, dtype=np.uint8)


def to_quaternion(pitch, roll, yaw):
    t0 = math.cos(yaw * 0.5)
    t1 = math.sin(yaw * 0.5)
    t2 = math.cos(roll * 0.5)
    t3 = math.sin(roll * 0.5)
    t4 = math.cos(pitch * 0.5)
    t5 = math.sin(pitch * 0.5)
    return Quaternionr(x_val=t0 * t3 * t4 - t1 * t2 * t5,
                       y_val=t0 * t2 * t5 + t1 * t3 * t4,
                       z_val=t1 * t2 * t4 - t0 * t3 * t5,
                       w_val=t0 * t2 * t4 + t1 * t3 * t5)


def to_eularian_angles(q):
    """ Returns (pitch, roll, yaw) in radians for the given Quaternionr """
    z = q.z_val
    y = q.y_val
    x = q.x_val
    w = q.w_val
    ysqr = y * y

    # roll (x-axis rotation)
    t0 = +2.0 * (w * x + y * z)
    t1 = +1.0 - 2.0 * (x * x + ysqr)
    roll = math.atan2(t0, t1)

    # pitch (y-axis rotation)
    t2 = +2.0 * (w * y - z * x)
    t2 = max(-1.0, min(1.0, t2))
    pitch = math.asin(t2)

    # yaw (z-axis rotation)
    t3 = +2.0 * (w * z + x * y)
    t4 = +1.0 - 2.0 * (ysqr + z * z)
    yaw = math.atan2(t3, t4)

    return pitch, roll, yaw


def is_port_available(port, host=LOCALHOST):
    import socket
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex((host, port)) != 0


def find_available_port(host=LOCALHOST):
    import socket
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        s.listen(1)
        return s.getsockname()[1]


class ArgumentParser(argparse.ArgumentParser):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.add_argument('--host', type=str, default=LOCALHOST, help='address of the simulation host')
        self.add_argument('--port', type=int, default=DEFAULT_PORT)
        self.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT,
                          help='seconds to wait for a response, waits indefinitely if not set')

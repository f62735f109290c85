# Copyright Epic Games, Inc. All Rights Reserved.

import math
from enum import IntEnum
import numpy as np

__all__ = ['ImageType', 'WeatherParameter', 'DrivetrainType', 'Vector3r', 'Quaternionr', 'Pose', 'GeoPoint', 'YawMode',
           'CollisionInfo', 'KinematicsState', 'EnvironmentState', 'ImageRequest', 'ImageResponse', 'CarControls',
           'CarState', 'MultirotorState']


class MsgpackMixin:
    """ Value types travel as msgpack maps keyed by attribute name. Nested value types are listed in
        `_nested` so that decoding can rebuild them.
    """
    _nested = {}

    def __repr__(self):
        return '<{}> {}'.format(type(self).__name__, self.to_msgpack())

    def __eq__(self, other):
        return type(self) == type(other) and self.__dict__ == other.__dict__

    def to_msgpack(self, *args, **kwargs):
        return {k: (v.to_msgpack() if isinstance(v, MsgpackMixin) else v) for k, v in self.__dict__.items()}

    @classmethod
    def from_msgpack(cls, encoded):
        obj = cls()
        for k, v in encoded.items():
            if type(k) == bytes:
                k = k.decode('utf-8')
            if k in cls._nested and isinstance(v, dict):
                v = cls._nested[k].from_msgpack(v)
            elif k in cls._nested and isinstance(v, list):
                v = [cls._nested[k].from_msgpack(x) for x in v]
            setattr(obj, k, v)
        return obj


class ImageType(IntEnum):
    Scene = 0
    DepthPlanar = 1
    DepthPerspective = 2
    DepthVis = 3
    DisparityNormalized = 4
    Segmentation = 5
    SurfaceNormals = 6
    Infrared = 7
    OpticalFlow = 8
    OpticalFlowVis = 9


class WeatherParameter(IntEnum):
    Rain = 0
    Roadwetness = 1
    Snow = 2
    RoadSnow = 3
    MapleLeaf = 4
    RoadLeaf = 5
    Dust = 6
    Fog = 7
    Enabled = 8


class DrivetrainType(IntEnum):
    MaxDegreeOfFreedom = 0
    ForwardOnly = 1


class Vector3r(MsgpackMixin):
    def __init__(self, x_val=0.0, y_val=0.0, z_val=0.0):
        self.x_val = x_val
        self.y_val = y_val
        self.z_val = z_val

    @staticmethod
    def nan_vector():
        return Vector3r(np.nan, np.nan, np.nan)

    def contains_nan(self):
        return math.isnan(self.x_val) or math.isnan(self.y_val) or math.isnan(self.z_val)

    def __add__(self, other):
        return Vector3r(self.x_val + other.x_val, self.y_val + other.y_val, self.z_val + other.z_val)

    def __sub__(self, other):
        return Vector3r(self.x_val - other.x_val, self.y_val - other.y_val, self.z_val - other.z_val)

    def __truediv__(self, other):
        if isinstance(other, (int, float, np.number)):
            return Vector3r(self.x_val / other, self.y_val / other, self.z_val / other)
        raise TypeError('unsupported operand type(s) for /: {} and {}'.format(type(self), type(other)))

    def __mul__(self, other):
        if isinstance(other, (int, float, np.number)):
            return Vector3r(self.x_val * other, self.y_val * other, self.z_val * other)
        raise TypeError('unsupported operand type(s) for *: {} and {}'.format(type(self), type(other)))

    def dot(self, other):
        if type(self) != type(other):
            raise TypeError('unsupported operand type(s) for dot: {} and {}'.format(type(self), type(other)))
        return self.x_val * other.x_val + self.y_val * other.y_val + self.z_val * other.z_val

    def cross(self, other):
        if type(self) != type(other):
            raise TypeError('unsupported operand type(s) for cross: {} and {}'.format(type(self), type(other)))
        cross_product = np.cross(self.to_numpy_array(), other.to_numpy_array())
        return Vector3r(*(float(c) for c in cross_product))

    def get_length(self):
        return (self.x_val ** 2 + self.y_val ** 2 + self.z_val ** 2) ** 0.5

    def distance_to(self, other):
        return (other - self).get_length()

    def to_quaternionr(self):
        return Quaternionr(self.x_val, self.y_val, self.z_val, 0)

    def to_numpy_array(self):
        return np.array([self.x_val, self.y_val, self.z_val], dtype=np.float32)

    def __iter__(self):
        return iter((self.x_val, self.y_val, self.z_val))


class Quaternionr(MsgpackMixin):
    def __init__(self, x_val=0.0, y_val=0.0, z_val=0.0, w_val=1.0):
        self.x_val = x_val
        self.y_val = y_val
        self.z_val = z_val
        self.w_val = w_val

    @staticmethod
    def nan_quaternion():
        return Quaternionr(np.nan, np.nan, np.nan, np.nan)

    def contains_nan(self):
        return math.isnan(self.w_val) or math.isnan(self.x_val) or math.isnan(self.y_val) or math.isnan(self.z_val)

    def __add__(self, other):
        if type(self) != type(other):
            raise TypeError('unsupported operand type(s) for +: {} and {}'.format(type(self), type(other)))
        return Quaternionr(self.x_val + other.x_val, self.y_val + other.y_val, self.z_val + other.z_val,
                           self.w_val + other.w_val)

    def __mul__(self, other):
        if type(self) != type(other):
            raise TypeError('unsupported operand type(s) for *: {} and {}'.format(type(self), type(other)))
        t, x, y, z = self.w_val, self.x_val, self.y_val, self.z_val
        a, b, c, d = other.w_val, other.x_val, other.y_val, other.z_val
        return Quaternionr(w_val=a * t - b * x - c * y - d * z,
                           x_val=b * t + a * x + d * y - c * z,
                           y_val=c * t + a * y + b * z - d * x,
                           z_val=d * t + z * a + c * x - b * y)

    def __truediv__(self, other):
        if type(other) == type(self):
            return self * other.inverse()
        if isinstance(other, (int, float, np.number)):
            return Quaternionr(self.x_val / other, self.y_val / other, self.z_val / other, self.w_val / other)
        raise TypeError('unsupported operand type(s) for /: {} and {}'.format(type(self), type(other)))

    def dot(self, other):
        if type(self) != type(other):
            raise TypeError('unsupported operand type(s) for dot: {} and {}'.format(type(self), type(other)))
        return self.x_val * other.x_val + self.y_val * other.y_val + self.z_val * other.z_val \
            + self.w_val * other.w_val

    def conjugate(self):
        return Quaternionr(-self.x_val, -self.y_val, -self.z_val, self.w_val)

    def star(self):
        return self.conjugate()

    def inverse(self):
        return self.star() / self.dot(self)

    def sgn(self):
        return self / self.get_length()

    def get_length(self):
        return (self.x_val ** 2 + self.y_val ** 2 + self.z_val ** 2 + self.w_val ** 2) ** 0.5

    def to_numpy_array(self):
        return np.array([self.x_val, self.y_val, self.z_val, self.w_val], dtype=np.float32)

    def __iter__(self):
        return iter((self.x_val, self.y_val, self.z_val, self.w_val))


class Pose(MsgpackMixin):
    _nested = {'position': Vector3r, 'orientation': Quaternionr}

    def __init__(self, position_val=None, orientation_val=None):
        self.position = position_val if position_val is not None else Vector3r()
        self.orientation = orientation_val if orientation_val is not None else Quaternionr()

    @staticmethod
    def nan_pose():
        return Pose(Vector3r.nan_vector(), Quaternionr.nan_quaternion())

    def contains_nan(self):
        return self.position.contains_nan() or self.orientation.contains_nan()

    def __iter__(self):
        return iter((self.position, self.orientation))


class GeoPoint(MsgpackMixin):
    def __init__(self, latitude=0.0, longitude=0.0, altitude=0.0):
        self.latitude = latitude
        self.longitude = longitude
        self.altitude = altitude


class YawMode(MsgpackMixin):
    def __init__(self, is_rate=True, yaw_or_rate=0.0):
        self.is_rate = is_rate
        self.yaw_or_rate = yaw_or_rate


class CollisionInfo(MsgpackMixin):
    _nested = {'normal': Vector3r, 'impact_point': Vector3r, 'position': Vector3r}

    def __init__(self):
        self.has_collided = False
        self.normal = Vector3r()
        self.impact_point = Vector3r()
        self.position = Vector3r()
        self.penetration_depth = 0.0
        self.time_stamp = 0
        self.object_name = ''
        self.object_id = -1


class KinematicsState(MsgpackMixin):
    _nested = {'position': Vector3r, 'orientation': Quaternionr, 'linear_velocity': Vector3r,
               'angular_velocity': Vector3r, 'linear_acceleration': Vector3r, 'angular_acceleration': Vector3r}

    def __init__(self):
        self.position = Vector3r()
        self.orientation = Quaternionr()
        self.linear_velocity = Vector3r()
        self.angular_velocity = Vector3r()
        self.linear_acceleration = Vector3r()
        self.angular_acceleration = Vector3r()


class EnvironmentState(MsgpackMixin):
    _nested = {'position': Vector3r, 'geo_point': GeoPoint, 'gravity': Vector3r}

    def __init__(self):
        self.position = Vector3r()
        self.geo_point = GeoPoint()
        self.gravity = Vector3r()
        self.air_pressure = 0.0
        self.temperature = 0.0
        self.air_density = 0.0


class ImageRequest(MsgpackMixin):
    def __init__(self, camera_name='0', image_type=ImageType.Scene, pixels_as_float=False, compress=True):
        # camera names used to be ints, the host only understands strings now
        self.camera_name = str(camera_name)
        self.image_type = int(image_type)
        self.pixels_as_float = pixels_as_float
        self.compress = compress


class ImageResponse(MsgpackMixin):
    _nested = {'camera_position': Vector3r, 'camera_orientation': Quaternionr}

    def __init__(self):
        self.image_data_uint8 = b''
        self.image_data_float = []
        self.camera_position = Vector3r()
        self.camera_orientation = Quaternionr()
        self.time_stamp = 0
        self.message = ''
        self.pixels_as_float = False
        self.compress = True
        self.width = 0
        self.height = 0
        self.image_type = ImageType.Scene


class CarControls(MsgpackMixin):
    def __init__(self, throttle=0.0, steering=0.0, brake=0.0, handbrake=False, is_manual_gear=False, manual_gear=0,
                 gear_immediate=True):
        self.throttle = throttle
        self.steering = steering
        self.brake = brake
        self.handbrake = handbrake
        self.is_manual_gear = is_manual_gear
        self.manual_gear = manual_gear
        self.gear_immediate = gear_immediate

    def set_throttle(self, throttle_val, forward):
        if forward:
            self.is_manual_gear = False
            self.manual_gear = 0
            self.throttle = abs(throttle_val)
        else:
            self.is_manual_gear = False
            self.manual_gear = -1
            self.throttle = -abs(throttle_val)


class CarState(MsgpackMixin):
    _nested = {'collision': CollisionInfo, 'kinematics_estimated': KinematicsState}

    def __init__(self):
        self.speed = 0.0
        self.gear = 0
        self.rpm = 0.0
        self.maxrpm = 0.0
        self.handbrake = False
        self.collision = CollisionInfo()
        self.kinematics_estimated = KinematicsState()
        self.timestamp = 0


class MultirotorState(MsgpackMixin):
    _nested = {'collision': CollisionInfo, 'kinematics_estimated': KinematicsState, 'gps_location': GeoPoint}

    def __init__(self):
        self.collision = CollisionInfo()
        self.kinematics_estimated = KinematicsState()
        self.gps_location = GeoPoint()
        self.timestamp = 0
        self.landed_state = 0
        self.ready = False
        self.ready_message = ''
        self.can_arm = False

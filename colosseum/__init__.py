# Copyright Epic Games, Inc. All Rights Reserved.

from .version import VERSION as __version__
from .client import Client, Session
from .vehicles import VehicleClient, MultirotorClient, CarClient
from .error import ColosseumError, ConnectionError, ConnectionTimeoutError, ProtocolError, RemoteError
from .types import *


__all__ = ['Client', 'Session', 'VehicleClient', 'MultirotorClient', 'CarClient', 'ColosseumError', 'ConnectionError',
           'ConnectionTimeoutError', 'ProtocolError', 'RemoteError', 'Vector3r', 'Quaternionr', 'Pose', 'GeoPoint',
           'YawMode', 'CollisionInfo', 'KinematicsState', 'EnvironmentState', 'ImageRequest', 'ImageResponse',
           'ImageType', 'WeatherParameter', 'DrivetrainType', 'CarControls', 'CarState', 'MultirotorState']

# Copyright Epic Games, Inc. All Rights Reserved.

from . import logger
from .client import Client
from .types import *

CLIENT_VERSION = 1
MIN_REQUIRED_SERVER_VERSION = 1


class VehicleClient(Client):
    """ Operations common to every vehicle type. Each one is a thin wrapper over `Client.call`, converting value types
        on the way in and out.
    """
    FUNCNAME_LIST_FUNCTIONS = 'list_functions'

    def _add_function(self, function_name):
        self.__dict__[function_name] = lambda *args: self.call(function_name, *args)

    def add_functions(self, function_names=None):
        """ Binds remote functions as methods of this instance, i.e. after `add_functions(['simGetWorldExtents'])`
            one can call `client.simGetWorldExtents()`. With no names given the host is asked for its function list.
        """
        if function_names is None:
            function_names = self.call(VehicleClient.FUNCNAME_LIST_FUNCTIONS)
        for fname in function_names:
            if type(fname) == bytes:
                fname = fname.decode('utf-8')
            self._add_function(fname)
        logger.debug('Functions bound: {}'.format(function_names))

    # ---------------------------------- common vehicle APIs ---------------------------------------------

    def reset(self):
        """ Resets the vehicle to its original starting state. `enable_api_control` and `arm_disarm` need to be called
            again afterwards.
        """
        self.call('reset')

    def ping(self):
        return self.call('ping')

    def get_client_version(self):
        return CLIENT_VERSION

    def get_server_version(self):
        return self.call('getServerVersion')

    def get_min_required_server_version(self):
        return MIN_REQUIRED_SERVER_VERSION

    def get_min_required_client_version(self):
        return self.call('getMinRequiredClientVersion')

    def confirm_connection(self):
        """ Pings the host and checks both sides are recent enough to talk to each other.

        Returns:
            bool: True if the versions are compatible
        """
        if self.ping():
            logger.info('Connected!')
        else:
            logger.warn('Ping returned false!')

        server_ver = self.get_server_version()
        client_ver = self.get_client_version()
        server_min_ver = self.get_min_required_server_version()
        client_min_ver = self.get_min_required_client_version()

        ver_info = 'Client Ver: {} (Min Req: {}), Server Ver: {} (Min Req: {})'.format(
            client_ver, client_min_ver, server_ver, server_min_ver)

        if server_ver < server_min_ver:
            logger.error(ver_info)
            logger.error('Simulator server is of older version and not supported by this client. Please upgrade!')
            return False
        if client_ver < client_min_ver:
            logger.error(ver_info)
            logger.error('Client is of older version and not supported by this server. Please upgrade!')
            return False
        logger.info(ver_info)
        return True

    def enable_api_control(self, is_enabled, vehicle_name=''):
        self.call('enableApiControl', is_enabled, vehicle_name)

    def is_api_control_enabled(self, vehicle_name=''):
        return self.call('isApiControlEnabled', vehicle_name)

    def arm_disarm(self, arm, vehicle_name=''):
        """
        Args:
            arm (bool): True to arm, False to disarm the vehicle
            vehicle_name (str, optional): Name of the vehicle to send this command to

        Returns:
            bool: Success
        """
        return self.call('armDisarm', arm, vehicle_name)

    def sim_pause(self, is_paused):
        self.call('simPause', is_paused)

    def sim_is_pause(self):
        return self.call('simIsPaused')

    def sim_continue_for_time(self, seconds):
        self.call('simContinueForTime', seconds)

    def sim_continue_for_frames(self, frames):
        self.call('simContinueForFrames', frames)

    def get_home_geo_point(self, vehicle_name=''):
        return GeoPoint.from_msgpack(self.call('getHomeGeoPoint', vehicle_name))

    def sim_set_time_of_day(self, is_enabled, start_datetime='', is_start_datetime_dst=False, celestial_clock_speed=1,
                            update_interval_secs=60, move_sun=True):
        """ start_datetime uses "%Y-%m-%d %H:%M:%S" format, empty string means current date & time """
        self.call('simSetTimeOfDay', is_enabled, start_datetime, is_start_datetime_dst, celestial_clock_speed,
                  update_interval_secs, move_sun)

    def sim_enable_weather(self, enable):
        self.call('simEnableWeather', enable)

    def sim_set_weather_parameter(self, param, val):
        self.call('simSetWeatherParameter', int(param), val)

    def sim_get_image(self, camera_name, image_type, vehicle_name='', external=False):
        """ Returns the compressed png as bytes, or None if the host had no image for us """
        # the host sends std::vector<uint8_t> as a msgpack string
        result = self.call('simGetImage', str(camera_name), int(image_type), vehicle_name, external)
        if result == '' or result == '\0' or result == b'' or result == b'\0':
            return None
        if type(result) == str:
            result = result.encode('utf-8', 'surrogateescape')
        return result

    def sim_get_images(self, requests, vehicle_name='', external=False):
        responses_raw = self.call('simGetImages', requests, vehicle_name, external)
        return [ImageResponse.from_msgpack(response_raw) for response_raw in responses_raw]

    def sim_get_vehicle_pose(self, vehicle_name=''):
        return Pose.from_msgpack(self.call('simGetVehiclePose', vehicle_name))

    def sim_set_vehicle_pose(self, pose, ignore_collision, vehicle_name=''):
        self.call('simSetVehiclePose', pose, ignore_collision, vehicle_name)

    def sim_get_object_pose(self, object_name):
        return Pose.from_msgpack(self.call('simGetObjectPose', object_name))

    def sim_set_object_pose(self, object_name, pose, teleport=True):
        return self.call('simSetObjectPose', object_name, pose, teleport)

    def sim_get_collision_info(self, vehicle_name=''):
        return CollisionInfo.from_msgpack(self.call('simGetCollisionInfo', vehicle_name))

    def sim_list_scene_objects(self, name_regex='.*'):
        return self.call('simListSceneObjects', name_regex)

    def sim_get_ground_truth_kinematics(self, vehicle_name=''):
        return KinematicsState.from_msgpack(self.call('simGetGroundTruthKinematics', vehicle_name))

    def sim_get_ground_truth_environment(self, vehicle_name=''):
        return EnvironmentState.from_msgpack(self.call('simGetGroundTruthEnvironment', vehicle_name))

    def sim_print_log_message(self, message, message_param='', severity=0):
        self.call('simPrintLogMessage', message, message_param, severity)

    def list_vehicles(self):
        return self.call('listVehicles')

    def get_settings_string(self):
        return self.call('getSettingsString')


class MultirotorClient(VehicleClient):
    # the *_async names mirror the host's function names, the calls themselves block until the host answers

    def takeoff_async(self, timeout_sec=20, vehicle_name=''):
        return self.call('takeoff', timeout_sec, vehicle_name)

    def land_async(self, timeout_sec=60, vehicle_name=''):
        return self.call('land', timeout_sec, vehicle_name)

    def go_home_async(self, timeout_sec=3e+38, vehicle_name=''):
        return self.call('goHome', timeout_sec, vehicle_name)

    def move_by_velocity_async(self, vx, vy, vz, duration, drivetrain=DrivetrainType.MaxDegreeOfFreedom,
                               yaw_mode=None, vehicle_name=''):
        yaw_mode = yaw_mode or YawMode()
        return self.call('moveByVelocity', vx, vy, vz, duration, int(drivetrain), yaw_mode, vehicle_name)

    def move_to_position_async(self, x, y, z, velocity, timeout_sec=3e+38, drivetrain=DrivetrainType.MaxDegreeOfFreedom,
                               yaw_mode=None, lookahead=-1, adaptive_lookahead=1, vehicle_name=''):
        yaw_mode = yaw_mode or YawMode()
        return self.call('moveToPosition', x, y, z, velocity, timeout_sec, int(drivetrain), yaw_mode, lookahead,
                         adaptive_lookahead, vehicle_name)

    def hover_async(self, vehicle_name=''):
        return self.call('hover', vehicle_name)

    def get_multirotor_state(self, vehicle_name=''):
        return MultirotorState.from_msgpack(self.call('getMultirotorState', vehicle_name))


class CarClient(VehicleClient):

    def set_car_controls(self, controls, vehicle_name=''):
        self.call('setCarControls', controls, vehicle_name)

    def get_car_state(self, vehicle_name=''):
        return CarState.from_msgpack(self.call('getCarState', vehicle_name))

    def get_car_controls(self, vehicle_name=''):
        return CarControls.from_msgpack(self.call('getCarControls', vehicle_name))

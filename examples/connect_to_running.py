# Copyright Epic Games, Inc. All Rights Reserved.

from colosseum import MultirotorClient, ImageRequest, ImageType
from colosseum.utils import ArgumentParser, string_to_uint8_array
import colosseum.logger as logger

"""
This script will attempt to connect to a running simulator instance, assuming its rpc server is listening at the
given host and port (DEFAULT_PORT unless told otherwise). It takes off, flies a short leg, grabs a camera frame and
lands again.
"""

# setting logging level so that we see all there is to see
logger.set_level(logger.DEBUG)

# see colosseum.utils.ArgumentParser.__init__ for list of default parameters
parser = ArgumentParser()
parser.add_argument('--vehicle', type=str, default='', help='vehicle name, empty means the default one')
args = parser.parse_args()

with MultirotorClient(args.host, args.port, timeout=args.timeout) as client:
    client.confirm_connection()
    client.enable_api_control(True, args.vehicle)
    client.arm_disarm(True, args.vehicle)

    client.takeoff_async(vehicle_name=args.vehicle)
    client.move_to_position_async(0, 10, -10, 5, vehicle_name=args.vehicle)

    responses = client.sim_get_images([ImageRequest('0', ImageType.Scene)], args.vehicle)
    for response in responses:
        pixels = string_to_uint8_array(response.image_data_uint8)
        print('{}x{} image, {} bytes'.format(response.width, response.height, len(pixels)))

    client.land_async(vehicle_name=args.vehicle)
    client.arm_disarm(False, args.vehicle)
    client.enable_api_control(False, args.vehicle)

print('Done')

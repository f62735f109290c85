# Copyright Epic Games, Inc. All Rights Reserved.

import argparse
from colosseum import VehicleClient, RemoteError
from colosseum.utils import DEFAULT_PORT, LOCALHOST

"""
This script shows how to reach host functions that don't have a dedicated wrapper. Function names are bound as
methods of the client instance and forward their arguments as-is.
"""

# note that we're using stock ArgumentParser here not colosseum.utils.ArgumentParser
parser = argparse.ArgumentParser()
parser.add_argument('--port', type=int, default=DEFAULT_PORT)
args = parser.parse_args()

client = VehicleClient(LOCALHOST, args.port)
client.add_functions(['simGetWorldExtents', 'simListAssets'])

print(client.simGetWorldExtents())
try:
    print(client.simListAssets())
except RemoteError as e:
    # the host reports failures per call, the connection stays usable
    print('simListAssets failed: {}'.format(e.error))

# calling the generic entry point directly works just as well
print(client.call('simIsPaused'))
client.close()

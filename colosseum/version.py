# Copyright Epic Games, Inc. All Rights Reserved.

VERSION = '0.1.0'

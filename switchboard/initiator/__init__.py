# Copyright 2015 OpenStack Foundation
# All Rights Reserved.
#
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.
"""Switchboard's Initiator module.

The initator module contains the capabilities for discovering the initiator
information as well as attaching volumes to a host and finding the block
devices that back them.
"""

# Number of path checks done after a login before giving up on the device.
# Zero keeps connect_volume from waiting at all.
DEVICE_SCAN_ATTEMPTS_DEFAULT = 0

PLATFORM_ALL = 'ALL'
OS_TYPE_ALL = 'ALL'
OS_TYPE_LINUX = 'LINUX'

ISCSI = "ISCSI"
FIBRE_CHANNEL = "FIBRE_CHANNEL"
NBD = "NBD"

# Every transport a connector can be requested for.  Only ISCSI has an
# implementation, the factory rejects the others explicitly.
PROTOCOLS = (ISCSI, FIBRE_CHANNEL, NBD)

"""
Test fixtures for the GCM sender.

Contains connection server response bodies:
- success.json: single registration id delivered
- unavailable.json: single registration id answered with Unavailable
- partial_device_group.json: device group partial success
- partial_multicast.json: two recipients, first delivered, second Unavailable
"""

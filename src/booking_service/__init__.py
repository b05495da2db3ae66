"""
Booking record service.

Creates, retrieves and updates reservation records stored in DynamoDB and
keeps the provider's timeslot availability in step with them.
"""

__version__ = "1.0.0"

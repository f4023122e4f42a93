"""Delivery module: remote PUT upload and local write behind one interface."""

from vtj.delivery.local import LocalSink
from vtj.delivery.remote import RemoteSink, drain_response
from vtj.delivery.sink import DeliveryReceipt, DeliverySink
from vtj.delivery.target import DeliveryTarget, is_remote_destination

__all__ = [
    "DeliveryReceipt",
    "DeliverySink",
    "DeliveryTarget",
    "LocalSink",
    "RemoteSink",
    "drain_response",
    "is_remote_destination",
]

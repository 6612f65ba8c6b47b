# -*- coding: utf-8 -*-
"""
Flow Module - Streamline tracing and point advection through velocity fields.

Usage
-----
    >>> from icevel.flow import flowline, displace
    >>> line = flowline(1, 60.08343, -140.46707)
    >>> lat1, lon1 = displace(1, 60.08343, -140.46707, 10.0)

Dependencies
------------
scipy

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-14

Modified
--------
2026-10-18
"""

from icevel.flow.displacement import displace
from icevel.flow.field import VelocityField
from icevel.flow.flowline import FlowlineOptions, Streamline, flowline
from icevel.flow.streamline import trace_streamline

__all__ = [
    'VelocityField',
    'trace_streamline',
    'FlowlineOptions',
    'Streamline',
    'flowline',
    'displace',
]

import logging
import os
import struct

import pytest


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


@pytest.fixture
def make_box():
    """Return a function assembling a box by hand, the size can be forged."""
    def _make_box(fourcc, payload=b'', size=None):
        if size is None:
            size = 8 + len(payload)

        return struct.pack('>I', size) + fourcc + payload

    return _make_box

"""CSV upload -> typed records -> sortable table.

Core of a small client-side viewer: file gating, CSV decoding, column sorting
and the session state machine that ties them together.
"""

__version__ = "0.1.0"

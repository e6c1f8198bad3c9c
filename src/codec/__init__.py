"""Record codec layer.

This package converts records to and from value trees. Strict codecs
report decode failures; the fault-tolerant wrappers turn those failures
into placeholder records so persisted data is never dropped.
"""

#
# @descr    OSPF neighbor monitoring, shared library
#

__version__ = '1.0'

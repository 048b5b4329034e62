"""World simulation services: movement, projectiles and the frame broadcast.

Everything here operates on an explicit WorldState handed in by the caller;
Socket.IO handlers and the broadcast loop are the only callers, keeping
transport concerns out of the simulation rules.
"""

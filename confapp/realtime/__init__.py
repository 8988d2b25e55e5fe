"""Realtime infrastructure (Socket.IO).

One socket server shared by every feature that pushes to the mobile client:
demo-clock jumps, live room videos and vote updates.
"""

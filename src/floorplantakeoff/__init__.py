"""Floorplan area & wall takeoff tool."""

"""NITM Hostel - account registration and authentication backend."""

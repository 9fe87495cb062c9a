"""Line-level task operations: field extraction, sorting, mutation."""

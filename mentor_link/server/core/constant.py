PROJECT_NAME = "Mentor-Link"
API_V1_STR = "/api/v1"
VERSION = "0.1.0"

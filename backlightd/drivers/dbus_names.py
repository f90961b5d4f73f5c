SENSOR_PROXY_SERVICE = "net.hadess.SensorProxy"
SENSOR_PROXY_PATH = "/net/hadess/SensorProxy"
SENSOR_PROXY_INTERFACE = "net.hadess.SensorProxy"

LOGIN1_SERVICE = "org.freedesktop.login1"
LOGIN1_SESSION_PATH = "/org/freedesktop/login1/session/auto"
LOGIN1_SESSION_INTERFACE = "org.freedesktop.login1.Session"

# D-Bus type signatures
LIGHT_LEVEL_SIGNATURE = "d"
SET_BRIGHTNESS_SIGNATURE = "ssu"  # subsystem, device name, brightness

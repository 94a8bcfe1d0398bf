import os

# Widget tests run without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

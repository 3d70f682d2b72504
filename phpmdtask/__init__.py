"""Run the PHP Mess Detector as a build step."""

__version__ = "0.1.0"

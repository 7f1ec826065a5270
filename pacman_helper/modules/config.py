import configparser
import os

DEFAULT_LOCATIONS = [
    "/etc/pacman-helper/pacman-helper.conf",
    os.path.expanduser("~/.config/pacman-helper/pacman-helper.conf"),
]

class HelperConfig:
    def __init__(self, locations=None):
        self.locations = locations or DEFAULT_LOCATIONS
        self.reload()

    def reload(self):
        """(Re)load configuration from the first existing file; defaults apply when none exists."""
        self.config = configparser.ConfigParser()
        self.loaded_from = None
        for path in self.locations:
            path = os.path.expanduser(path)
            if os.path.isfile(path):
                self.config.read(path, encoding="utf-8")
                self.loaded_from = path
                return

    def get(self, section, option, fallback=None):
        try:
            return self.config.get(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return fallback

    def getboolean(self, section, option, fallback=False):
        try:
            return self.config.getboolean(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback

    def getint(self, section, option, fallback=0):
        try:
            return self.config.getint(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback

# Shared default instance
config = HelperConfig()

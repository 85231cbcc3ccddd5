import platform


class Version:
    version_name = "0.1.0"

    @staticmethod
    def version_string():
        return "spotify-uri " + Version.version_name

    @staticmethod
    def system_info_string():
        return Version.version_string() + \
               "; Python " + platform.python_version() + \
               "; " + platform.system()

class SprintcalException(Exception):
    pass


class SettingsException(SprintcalException):
    pass


class InvalidSprintException(SprintcalException):
    pass

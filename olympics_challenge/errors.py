"""Error kinds raised by the challenge pipeline."""


class ChallengeError(Exception):
    """Base error. `field` names the offending column or parameter, if any."""

    kind = 'ChallengeError'

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class DataError(ChallengeError):
    """Malformed input: missing columns or nothing left after filtering."""

    kind = 'DataError'


class ConfigError(ChallengeError):
    """Split or submission settings outside their accepted bounds."""

    kind = 'ConfigError'


class PreprocessingError(ChallengeError):
    """A predictor cannot be imputed or standardised on the training subset."""

    kind = 'PreprocessingError'


class TrainingError(ChallengeError):
    """Empty training subset or out-of-bounds hyperparameter for a model fit."""

    kind = 'TrainingError'

# fuel_regression/utils/errors.py
class PipelineError(RuntimeError):
    """
    Base class of every fatal pipeline failure.
    A run either completes every stage or aborts with one of these.
    """


class DataUnavailableError(PipelineError):
    """
    Record source could not be fetched or parsed. Not retried by the core.
    """


class InsufficientDataError(PipelineError):
    """
    No usable records left after filtering.
    """


class DegenerateRangeError(PipelineError):
    """
    A normalization column has max == min, or a range that is not finite.
    """

    def __init__(self, column: str, low: float, high: float):
        if low == high:
            detail = f"zero range (min == max == {low})"
        else:
            detail = f"non-finite range [{low}, {high}]"
        super().__init__(
            f"column '{column}' has {detail}; min-max normalization is undefined"
        )
        self.column = column
        self.low = low
        self.high = high


class NumericDivergenceError(PipelineError):
    """
    Training produced a non-finite loss.
    """

    def __init__(self, epoch: int, loss: float):
        super().__init__(f"non-finite loss at epoch {epoch}: {loss}")
        self.epoch = epoch
        self.loss = loss


class ModelBusyError(PipelineError):
    """
    Another fit is already writing to this model.
    """


class TrainingCancelledError(PipelineError):
    """
    Cancellation was requested between batches.
    """


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided config / CLI input.
    Should NOT print traceback.
    """

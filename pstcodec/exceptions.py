class PstException(Exception):
    '''Base class to extend in order to throw exception in pstcodec.

    It takes as first argument the chain of the regions that
    caused the exception, innermost first; callers up in the walk
    append their own name to it.
    '''

    def __init__(self, chain, msg=None):
        self.chain = chain
        self.msg = msg
        super().__init__(msg)

    def __str__(self):
        where = ' < '.join(str(_) for _ in self.chain)
        return f'{self.msg or self.__class__.__name__} [{where}]' if where else (self.msg or self.__class__.__name__)


class OversizedField(PstException):
    '''The declared length of a text is over the safety bound.'''
    pass


class NonZeroInZeroField(PstException):
    pass


class NonDivisibleWidth(PstException):
    '''A uniform split doesn't divide evenly the parent region.'''
    pass


class SubsectionSizeMismatch(PstException):
    '''The subsections of a heterogeneous split don't add up to the parent.'''
    pass


class TruncatedStream(PstException):
    pass


class MalformedValue(PstException):
    '''A text value can't be encoded back into its kind and width.'''
    pass

import io
import logging

from .exceptions import TruncatedStream


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file objects to
    uniform their properties: mainly we need a read() that fails loudly
    when the data is over and a seek() that works relative to the cursor.

    The cursor of the wrapped object is the only source of truth
    for the position into the savegame.'''
    def __init__(self, obj, flags='r'):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.flags = flags
        self.obj = obj
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.obj!r})>'

    def init_str(self):
        '''We think this is a path'''
        mode = 'wb' if 'w' in self.flags else 'rb'
        logger.debug('opening path \'%s\' with mode \'%s\'' % (self.obj, mode))
        self.obj = open(self.obj, mode)

    def init_PosixPath(self):
        self.obj = str(self.obj)
        self.init_str()

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_file(self):
        '''Already a file-like object, we use it as it is'''
        if not hasattr(self.obj, 'read') and not hasattr(self.obj, 'write'):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self.obj.__class__.__name__)

    def close(self):
        self.obj.close()

    def seek(self, offset, whence=io.SEEK_SET):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        return self.obj.seek(offset, whence)

    def read_exact(self, size, name=None):
        '''Read exactly size bytes or fail with TruncatedStream.'''
        offset = self.obj.tell()
        data = self.obj.read(size)
        if len(data) != size:
            raise TruncatedStream(
                chain=[name] if name else [],
                msg=f'expected {size} bytes at offset {offset}, got {len(data)}')

        return data

    def write(self, data):
        return self.obj.write(data)

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)

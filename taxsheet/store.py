from taxsheet import config


class SessionStore:
    """The uploaded bytes and filename for one session.

    Wraps any mutable mapping: Streamlit's ``st.session_state`` in the app,
    a plain dict in tests. One slot per session, and a later ``put``
    replaces the earlier upload wholesale.
    """

    def __init__(self, state):
        self._state = state

    def put(self, blob: bytes):
        self._state[config.UPLOADED_FILE_KEY] = bytes(blob)

    def get(self):
        return self._state.get(config.UPLOADED_FILE_KEY)

    def put_string(self, key, value):
        self._state[key] = value

    def get_string(self, key):
        return self._state.get(key)

    def put_file_name(self, name):
        self.put_string(config.FILE_NAME_KEY, name)

    def get_file_name(self):
        return self.get_string(config.FILE_NAME_KEY)

    def has_upload(self):
        return bool(self.get())

    def clear(self):
        for key in (config.UPLOADED_FILE_KEY, config.FILE_NAME_KEY):
            if key in self._state:
                del self._state[key]

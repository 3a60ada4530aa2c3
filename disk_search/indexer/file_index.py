class FileIndex:
    """Flat mapping of file and directory names to their absolute paths.

    Names are unique: when the same name is added twice the later path
    replaces the earlier one. An index is filled once by a traversal and then
    only read; a newer index replaces it as a whole.
    """

    def __init__(self, files=None):
        self.files = dict(files) if files else {}

    def add(self, name, path):
        self.files[name] = path

    def items(self):
        return self.files.items()

    def get(self, name, default=None):
        return self.files.get(name, default)

    def __len__(self):
        return len(self.files)

    def __contains__(self, name):
        return name in self.files

    def __iter__(self):
        return iter(self.files)

    def __eq__(self, other):
        if not isinstance(other, FileIndex):
            return NotImplemented
        return self.files == other.files

    def __repr__(self):
        return f"FileIndex({len(self.files)} entries)"

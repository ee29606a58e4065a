import itertools
import os


PROJECT_ROOT_MARKER = "setup.py"


def get_project_root() -> str:
    """
    Walks up from the working directory to the first folder holding setup.py.

    Raises:
        FileNotFoundError: If no parent holds the marker.
    """
    directory = os.getcwd()

    while not os.path.exists(os.path.join(directory, PROJECT_ROOT_MARKER)):
        parent = os.path.dirname(directory)
        if parent == directory:
            raise FileNotFoundError(
                f"No '{PROJECT_ROOT_MARKER}' found above {os.getcwd()}"
            )
        directory = parent

    return directory


def get_unique_filename(folder_path: str, filename: str, extension: str) -> str:
    """
    Returns a path in folder_path that does not exist yet, appending " (1)", " (2)", ... to
    the filename when needed.

    Args:
        folder_path (str): Folder path.
        filename (str): Desired filename, without extension.
        extension (str): File extension, without dot (e.g. "json").
    """
    candidates = itertools.chain(
        [f"{filename}.{extension}"],
        (f"{filename} ({i}).{extension}" for i in itertools.count(1)),
    )
    for candidate in candidates:
        file_path = os.path.join(folder_path, candidate)
        if not os.path.exists(file_path):
            return file_path

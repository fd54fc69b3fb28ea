# livesync/protocol.py
"""
Wire constants for the LiveSync protocol.

  delete: (operation)(fileNameLength)(fileName)
  create: (operation)(fileNameLength)(fileName)(fileContentLength)(fileContent)

All length fields are zero-padded ASCII decimals.
"""

OPERATION_SIZE = 1
FILE_NAME_LENGTH_SIZE = 5
CONTENT_LENGTH_SIZE = 10

DELETE_OPERATION = 7
CREATE_OPERATION = 8

MAX_FILE_NAME_LENGTH = 10**FILE_NAME_LENGTH_SIZE - 1
MAX_CONTENT_LENGTH = 10**CONTENT_LENGTH_SIZE - 1

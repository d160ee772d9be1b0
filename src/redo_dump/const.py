ERRORS = {
  "E_OPEN": "Cannot open log file",
  "E_SHORT_READ": "Short read",
  "E_STREAM": "I/O error while reading log file",
}

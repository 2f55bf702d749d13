import os
import tempfile

# keep test runs out of the real per-user log directory
os.environ.setdefault("PMO_LOG_DIR", tempfile.mkdtemp(prefix="pmo-test-logs-"))

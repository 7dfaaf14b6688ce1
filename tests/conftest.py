import os
import tempfile

# Logs dos testes vão para um diretório temporário (lido por mudclient.config no import)
os.environ.setdefault("MUD_LOG_DIR", tempfile.mkdtemp(prefix="mudclient-logs-"))

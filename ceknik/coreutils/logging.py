import logging
from datetime import datetime
from pathlib import Path


def setup_logging(level=logging.INFO, log_dir: str = "logs"):
    """Setup basic logging configuration"""
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[
            logging.FileHandler(
                f"{log_dir}/ceknik_{datetime.now().strftime('%Y-%m-%d')}.log"
            ),
            logging.StreamHandler(),
        ],
    )
    # urllib3 logs every pooled connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logging.getLogger(__name__)


def mask_nik(nik: str) -> str:
    """Mask the serial part of a NIK for log lines, e.g. 3171010101900001 -> 317101010190****"""
    if not nik or len(nik) < 4:
        return "****"
    return f"{nik[:-4]}****"

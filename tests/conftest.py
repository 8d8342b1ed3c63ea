import logging

import pytest
import yaml

from config import ConfigurationManager
from identity_validator.utils.logger import ROOT_LOGGER_NAME


# ICAO 9303 specimen passport
TD3_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA" + "<" * 19
TD3_LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"

# Swiss identity card in TD1 layout
TD1_LINE1 = "IDCHEA123456784" + "<" * 15
TD1_LINE2 = "5207273M2501017CHE" + "<" * 12
TD1_LINE3 = "MUSTER<<HANS<PETER" + "<" * 12

# German identity card in TD2 layout
TD2_LINE1 = "IDD<<MUSTERMANN<<ERIKA" + "<" * 14
TD2_LINE2 = "T220001293D<<6408125F3103315" + "<" * 8


@pytest.fixture(autouse=True)
def reset_configuration():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()
    logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()


@pytest.fixture
def passport_mrz():
    return f"{TD3_LINE1}<br>{TD3_LINE2}"


@pytest.fixture
def id_card_mrz():
    return f"{TD1_LINE1}\\n{TD1_LINE2}\\n{TD1_LINE3}"


@pytest.fixture
def template_store(tmp_path):
    """Directory plus a writer for ad-hoc template definitions."""
    root = tmp_path / "templates"
    root.mkdir()

    def write(notation, structure, line_length=10, separator="<", raw=None):
        country, doc_type = notation.split(".")
        folder = root / country
        folder.mkdir(exist_ok=True)
        path = folder / f"{doc_type}.yaml"

        if raw is not None:
            path.write_text(raw, encoding="utf-8")
            return path

        data = {
            "meta": {
                "type": {"code": doc_type.upper(), "description": "Test document"},
                "country": {"code": country, "name": "Testland", "international": "Testland"},
                "separator": separator,
                "line_length": line_length,
            },
            "structure": structure,
        }
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    write.root = root
    return write

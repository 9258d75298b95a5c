# tests/test_cli.py
import pytest
from rich.console import Console

import cli
from product_sdk.client import ProductClient


@pytest.fixture
def output(monkeypatch):
    console = Console(record=True, width=200)
    monkeypatch.setattr(cli, "console", console)
    return console


@pytest.fixture
def sdk(client):
    return ProductClient(base_url="http://testserver", session=client)


def run(sdk, *argv):
    args = cli.build_parser().parse_args(list(argv))
    return cli.run_command(args, sdk)


def test_list_command(sdk, output):
    assert run(sdk, "list", "--category", "Electronics", "--sort", "price") == 0
    text = output.export_text()
    assert "SmartPhone X" in text
    assert "Pro Runner" not in text
    assert "3 product(s)" in text


def test_get_command(sdk, output):
    assert run(sdk, "get", "3") == 0
    text = output.export_text()
    assert "#3 Noise-Cancelling Headphones" in text
    assert "batteryLife" in text


def test_create_update_delete(sdk, output, store):
    assert run(sdk, "create", "--name", "Kettle", "--category", "Home", "--sub-category", "Kitchen Appliances",
               "--price", "25", "--stock", "4", "--brand", "Boil", "--description", "Electric kettle",
               "--specs", '{"litres": 1.7}') == 0
    assert store.get(6).specifications == {"litres": 1.7}
    assert run(sdk, "update", "6", "--price", "19.5") == 0
    assert store.get(6).price == 19.5
    assert run(sdk, "delete", "6") == 0
    assert store.get(6) is None
    assert "Product 6 deleted" in output.export_text()


def test_api_error_exit_code(sdk, output):
    assert run(sdk, "delete", "2") == 1
    assert "Cannot delete default products" in output.export_text()


def test_categories_command(sdk, output):
    assert run(sdk, "categories") == 0
    assert "Kitchen Appliances" in output.export_text()


def test_try_api_reports_errors(sdk, output):
    assert cli.try_api(sdk.get_product, 999) is None
    assert cli.status_message.startswith("Error: HTTP 404")


def test_show_products_empty(output):
    cli.show_products({"products": []})
    assert "No products found" in output.export_text()

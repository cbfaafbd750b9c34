"""Tests for the receipt/document file manager."""

from __future__ import annotations

from datetime import date

import pytest

from churchbook.errors import AttachmentError
from churchbook.models import TransactionType
from churchbook.services import attachments

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


def test_encode_then_decode_data_url():
    url = attachments.encode_data_url(PNG_BYTES, "image/png")
    decoded = attachments.decode_data_url(url)

    assert url.startswith("data:image/png;base64,")
    assert decoded.data == PNG_BYTES
    assert decoded.mime_type == "image/png"
    assert decoded.is_image
    assert decoded.extension == ".png"


def test_decode_accepts_parameters_and_missing_mime():
    with_params = attachments.decode_data_url("data:application/pdf;name=bill.pdf;base64,JVBERg==")
    without_mime = attachments.decode_data_url("data:;base64,AAEC")

    assert with_params.mime_type == "application/pdf"
    assert with_params.data == b"%PDF"
    assert with_params.extension == ".pdf"
    assert without_mime.mime_type == "application/octet-stream"
    assert without_mime.data == b"\x00\x01\x02"


@pytest.mark.parametrize(
    "url",
    ["https://example.com/receipt.jpg", "data:image/png,notbase64", "data:image/png;base64,@@@"],
)
def test_decode_rejects_bad_urls(url):
    with pytest.raises(AttachmentError):
        attachments.decode_data_url(url)


def test_encode_file_guesses_mime(tmp_path):
    receipt = tmp_path / "receipt.jpg"
    receipt.write_bytes(b"jpeg-bytes")

    url = attachments.encode_file(receipt)

    assert url.startswith("data:image/jpeg;base64,")
    assert attachments.decode_data_url(url).extension == ".jpg"


def test_list_attachments_filters(transaction_factory):
    url = attachments.encode_data_url(PNG_BYTES, "image/png")
    march_bill = transaction_factory(day=date(2024, 3, 2), attachment_url=url)
    april_gift = transaction_factory(
        txn_type=TransactionType.INCOME, category="Donation", day=date(2024, 4, 2), attachment_url=url
    )
    no_file = transaction_factory(day=date(2024, 3, 9))
    txs = [march_bill, april_gift, no_file]

    assert attachments.list_attachments(txs) == [april_gift, march_bill]
    assert attachments.list_attachments(txs, month=3) == [march_bill]
    assert attachments.list_attachments(txs, txn_type=TransactionType.INCOME) == [april_gift]
    assert attachments.list_attachments(txs, year=2023) == []


def test_save_attachment_writes_file(tmp_path, transaction_factory):
    txn = transaction_factory(
        id="t42", day=date(2024, 5, 6), attachment_url=attachments.encode_data_url(PNG_BYTES, "image/png")
    )

    path = attachments.save_attachment(txn, tmp_path / "files")

    assert path.name == "2024-05-06_t42.png"
    assert path.read_bytes() == PNG_BYTES


def test_save_attachment_without_file_raises(tmp_path, transaction_factory):
    with pytest.raises(AttachmentError):
        attachments.save_attachment(transaction_factory(), tmp_path)

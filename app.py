#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
QR Styling - Flask Web Application

Export endpoints rendering styled QR codes from query / form parameters.
"""

import logging
from io import BytesIO
from typing import Optional

from flask import Flask, jsonify, request, send_file

from qr_styling import (
    BorderOptions,
    OutputFormat,
    Position,
    QRBorderOptions,
    QRCodeStyling,
    QRStylingError,
    options_from_dict,
)
from qr_styling.errors import ConfigurationError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)


def _read_border(req) -> Optional[QRBorderOptions]:
    """Border options from request parameters, None when no border was asked for."""
    values = req.values
    texts = {
        position: (values.get(f'border_{position.value}_text') or '').strip()
        for position in Position
    }
    if not values.get('border_thickness') and not any(texts.values()):
        return None

    try:
        thickness = float(values.get('border_thickness') or 10)
        round_ = float(values.get('border_round') or 0)
    except ValueError as ex:
        raise ConfigurationError(f"Invalid border parameter: {ex}") from ex

    border = QRBorderOptions(
        border=BorderOptions(thickness, values.get('border_color') or '#000000'),
        round=round_,
    )
    for position, text in texts.items():
        if text:
            border = border.with_text(position, text)
    return border


def _parse_format(fmt: str) -> Optional[OutputFormat]:
    try:
        return OutputFormat.parse(fmt)
    except ConfigurationError:
        return None


@app.route('/health', methods=['GET'])
def health():
    return jsonify(status='ok')


@app.route('/export/<fmt>', methods=['GET', 'POST'])
def export(fmt):
    output = _parse_format(fmt)
    if output is None:
        return f"Formato no soportado: {fmt}", 404

    if not (request.values.get('data') or request.values.get('text') or '').strip():
        return "Falta texto", 400

    try:
        options = options_from_dict(request.values)
        logo = request.files.get('logo')
        if logo is not None and logo.filename:
            options = _with_logo(options, logo.read())
        qr = QRCodeStyling(options)
        payload = qr.render(output, border=_read_border(request))
    except QRStylingError as ex:
        logger.warning(f"Export failed: {ex}")
        return str(ex), 400

    logger.info(f"Exported {output.value} ({len(payload)} bytes)")
    return send_file(BytesIO(payload), as_attachment=True,
                     download_name=f'qr_styled.{output.extension}',
                     mimetype=output.mime_type)


def _with_logo(options, image: bytes):
    """Attach an uploaded logo to already validated options."""
    from dataclasses import replace
    return replace(options, image=image)


if __name__ == "__main__":
    app.run(debug=True)

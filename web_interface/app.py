#!/usr/bin/env python3
"""
Web interface for the Timelock Wallet
"""

from flask import Flask, request, jsonify
import json
import os
import sys

# Add project root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from timelock_wallet.config import HostConfig, configure_logging
from timelock_wallet.host import ContractHost, InMemoryLedger, JsonFileStorage, MemoryStorage
from timelock_wallet.identity import AccountKey, address_from_public_key, verify_signature


def call_message(method: str, args: list, value: int) -> bytes:
    """Canonical bytes a caller signs to authorize a structured call"""
    payload = {'method': method, 'args': list(args), 'value': value}
    return json.dumps(payload, sort_keys=True, separators=(',', ':')).encode()


def build_host(config: HostConfig) -> ContractHost:
    ledger = InMemoryLedger(timestamp=config.genesis_time)
    if config.state_file:
        storage = JsonFileStorage(config.state_file)
    else:
        storage = MemoryStorage()
    return ContractHost(ledger, storage)


def _authenticate(data: dict, message: bytes):
    """Return the caller identity proven by the request signature, or None"""
    public_key = data.get('public_key', '')
    signature = data.get('signature', '')
    if not public_key or not signature:
        return None
    try:
        caller = address_from_public_key(public_key)
    except (TypeError, ValueError):
        return None
    if not verify_signature(message, signature, public_key):
        return None
    return caller


def _attached_value(data: dict) -> int:
    value = data.get('value', 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"value must be a non-negative integer, got {value!r}")
    return value


def create_app(host: ContractHost = None, config: HostConfig = None) -> Flask:
    config = config or HostConfig.from_env()
    host = host or build_host(config)

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config['HOST_CONFIG'] = config
    app.config['CONTRACT_HOST'] = host

    @app.route('/api/accounts', methods=['POST'])
    def create_account():
        """Generate a key pair and fund it from the faucet"""
        key = AccountKey()
        balance = host.fund(key.address, config.faucet_amount)

        app.logger.info("Created account %s", key.address)

        return jsonify({
            'success': True,
            'address': key.address,
            'public_key': key.get_public_key_hex(),
            'private_key': key.get_private_key_hex(),
            'balance': balance
        })

    @app.route('/api/call', methods=['POST'])
    def call_wallet():
        """Execute a signed wallet call"""
        try:
            data = request.get_json(force=True)
            method = data['method']
            if not isinstance(method, str):
                raise ValueError("method must be a string")
            args = data.get('args', [])
            if not isinstance(args, list):
                raise ValueError("args must be a list")
            value = _attached_value(data)
        except Exception as e:
            return jsonify({'success': False, 'error': f"Malformed request: {e}"}), 400

        caller = _authenticate(data, call_message(method, args, value))
        if caller is None:
            return jsonify({'success': False, 'error': 'Invalid signature'}), 401

        result = host.call(caller, method, *args, value=value)
        if not result.success:
            app.logger.info("Call %s by %s failed: %s", method, caller, result.to_dict()['error'])
            return jsonify(result.to_dict()), 400

        return jsonify(result.to_dict())

    @app.route('/api/call_raw', methods=['POST'])
    def call_wallet_raw():
        """Execute signed binary call data"""
        try:
            data = request.get_json(force=True)
            calldata_hex = data['calldata']
            calldata = bytes.fromhex(calldata_hex[2:] if calldata_hex.startswith('0x') else calldata_hex)
            value = _attached_value(data)
        except Exception as e:
            return jsonify({'success': False, 'error': f"Malformed request: {e}"}), 400

        caller = _authenticate(data, calldata_hex.encode())
        if caller is None:
            return jsonify({'success': False, 'error': 'Invalid signature'}), 401

        result = host.call_raw(caller, calldata, value=value)
        return jsonify(result.to_dict()), (200 if result.success else 400)

    @app.route('/api/wallet')
    def get_wallet():
        """Current wallet state"""
        with host.locked():
            state = host.state()
            view = {
                'contract': host.address,
                'owner': state.owner,
                'unlock_time': state.unlock_time,
                'balance': host.balance(),
                'now': host.now(),
                'status': host.lock_status().value
            }
        return jsonify(view)

    @app.route('/api/accounts/<address>')
    def get_account(address):
        try:
            balance = host.balance_of(address)
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        return jsonify({'address': address.lower(), 'balance': balance})

    @app.route('/api/events')
    def get_events():
        """Committed event log"""
        return jsonify({'events': [e.to_dict() for e in host.events()]})

    @app.route('/api/time/advance', methods=['POST'])
    def advance_time():
        """Move the local ledger clock forward"""
        try:
            data = request.get_json(force=True)
            seconds = int(data['seconds'])
            now = host.advance_time(seconds)
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        return jsonify({'success': True, 'now': now})

    return app


if __name__ == "__main__":
    config = HostConfig.from_env()
    configure_logging(config.log_level)
    app = create_app(config=config)
    app.run(
        host=config.http_host,
        port=config.port,
        debug=False
    )

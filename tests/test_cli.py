import json

import pytest

from approval_detector import cli, config
from approval_detector.errors import ReputationLookupError

from .builders import (
    CONTRACT_ADDRESS,
    INFINITE_APPROVAL,
    NORMAL_APPROVAL,
    make_approval_input,
    make_call,
    make_request_payload,
)


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, 'load_dotenv', lambda **kwargs: False)
    for name in ('ETHERSCAN_API_KEY', 'CHAIN_ID', 'RPC_URL', 'MAX_ALLOWED_APPROVAL', 'REQUEST_TIMEOUT'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client_factory(monkeypatch, reputation_provider):
    created = []

    def factory(**kwargs):
        created.append(kwargs)
        return reputation_provider

    monkeypatch.setattr(cli, 'EtherscanReputationClient', factory)
    return created


def write_request(tmp_path, payload):
    path = tmp_path / 'request.json'
    path.write_text(json.dumps(payload))
    return str(path)


def test_clean_request_exits_zero(tmp_path, capsys, client_factory):
    request_file = write_request(tmp_path, make_request_payload('0xaaaaaaaa'))

    exit_code = cli.main(['--request', request_file, '--api-key', 'key'])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == cli.EXIT_CLEAN
    assert payload['detected'] is False
    assert 'message' not in payload
    assert payload['id'] == 'unique-id'
    assert payload['trace']['from'] == '0xfdD055Cf3EaD343AD51f4C7d1F12558c52BaDFA5'
    assert client_factory[0]['chain_id'] == 1


def test_detection_exits_one_and_saves_output(tmp_path, capsys, client_factory):
    request_file = write_request(tmp_path, make_request_payload(calls=[
        make_call(make_approval_input(CONTRACT_ADDRESS, INFINITE_APPROVAL)),
    ]))
    output_file = tmp_path / 'out' / 'result.json'

    exit_code = cli.main([
        '--request', request_file,
        '--api-key', 'key',
        '--chain-id', '10',
        '--output', str(output_file),
    ])

    printed = json.loads(capsys.readouterr().out)
    saved = json.loads(output_file.read_text())
    assert exit_code == cli.EXIT_DETECTED
    assert printed == saved
    assert saved['detected'] is True
    assert saved['message'] == 'Infinite approval detected'
    assert client_factory[0]['chain_id'] == 10


def test_max_allowed_approval_argument(tmp_path, capsys, client_factory):
    request_file = write_request(tmp_path, make_request_payload(make_approval_input(CONTRACT_ADDRESS, 5)))

    exit_code = cli.main(['--request', request_file, '--api-key', 'key', '--max-allowed-approval', '0x4'])

    assert exit_code == cli.EXIT_DETECTED
    assert json.loads(capsys.readouterr().out)['message'] == (
        'Detected approval with amount greater than max allowed'
    )


def test_invalid_request_exits_two(tmp_path, capsys, client_factory):
    payload = make_request_payload()
    payload['protocolAddress'] = 'definitely not address'
    request_file = write_request(tmp_path, payload)

    exit_code = cli.main(['--request', request_file, '--api-key', 'key'])

    printed = json.loads(capsys.readouterr().out)
    assert exit_code == cli.EXIT_ERROR
    assert printed['detected'] is False
    assert 'protocolAddress' in printed['error']
    assert client_factory == []


def test_lookup_failure_exits_two(tmp_path, capsys, client_factory, reputation_provider):
    reputation_provider.is_contract.side_effect = ReputationLookupError('Etherscan getcontractcreation request failed')
    request_file = write_request(tmp_path, make_request_payload(make_approval_input(CONTRACT_ADDRESS, NORMAL_APPROVAL)))

    exit_code = cli.main(['--request', request_file, '--api-key', 'key'])

    printed = json.loads(capsys.readouterr().out)
    assert exit_code == cli.EXIT_ERROR
    assert printed['error'] == 'Etherscan getcontractcreation request failed'


def test_missing_request_file_exits_two(tmp_path, capsys, client_factory):
    exit_code = cli.main(['--request', str(tmp_path / 'missing.json'), '--api-key', 'key'])

    assert exit_code == cli.EXIT_ERROR
    assert 'Could not read request' in json.loads(capsys.readouterr().out)['error']


def test_missing_api_key_is_usage_error(tmp_path, client_factory):
    request_file = write_request(tmp_path, make_request_payload())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(['--request', request_file])

    assert excinfo.value.code == 2


def test_request_too_deep_to_decode_exits_two(tmp_path, capsys, client_factory):
    request_file = tmp_path / 'request.json'
    request_file.write_text('[' * 100000 + ']' * 100000)

    exit_code = cli.main(['--request', str(request_file), '--api-key', 'key'])

    assert exit_code == cli.EXIT_ERROR
    assert 'Could not read request' in json.loads(capsys.readouterr().out)['error']

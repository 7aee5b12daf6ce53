"""
CLI Entry Point Tests
Exit status contract and runner wiring
"""

import json
import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from loguru import logger

import main
from blockchain.errors import NetworkError


@pytest.fixture(autouse=True)
def restore_logger():
    """main.run() replaces loguru handlers"""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    monkeypatch.setenv('TEST_RPC_URL', 'https://kovan.example/rpc')
    monkeypatch.setenv('TEST_DEPLOYER_KEY', '0x' + '22' * 32)

    path = tmp_path / 'deploy_config.json'
    path.write_text(json.dumps({
        'default_network': 'kovan',
        'networks': {
            'kovan': {'rpc_url_env': 'TEST_RPC_URL', 'private_key_env': 'TEST_DEPLOYER_KEY'}
        },
        'deployment': {
            'contract_name': 'AnchorFlashLiquidator',
            'expected_network': 'kovan',
            'gas_price_multiplier': '1.05',
            'artifacts_dir': str(tmp_path / 'artifacts'),
            'confirmation_timeout_seconds': 60
        }
    }))
    return str(path)


class TestExitStatus:

    def test_success_exits_zero(self):
        with patch.object(main.DeployRunner, 'start', new=AsyncMock()):
            assert main.run([]) == 0

    def test_failure_exits_one(self, capsys):
        error = NetworkError("Failed to query gas price: connection refused")

        with patch.object(main.DeployRunner, 'start', new=AsyncMock(side_effect=error)):
            assert main.run([]) == 1

        stderr = capsys.readouterr().err
        assert "Deployment failed" in stderr
        assert "connection refused" in stderr
        assert "Traceback" in stderr

    def test_missing_config_exits_one(self, tmp_path):
        assert main.run(['--config', str(tmp_path / 'missing.json')]) == 1

    def test_unknown_network_exits_one(self, config_path):
        assert main.run(['--config', config_path, '--network', 'ropsten']) == 1


class TestDeployRunner:

    @pytest.mark.asyncio
    async def test_wires_settings_into_procedure(self, config_path, tmp_path):
        with patch('main.build_context') as build_context, \
                patch('main.DeployerProcedure') as procedure_cls:
            procedure_cls.return_value.run = AsyncMock()

            runner = main.DeployRunner(config_path=config_path)
            await runner.start()

        build_context.assert_called_once_with(
            'https://kovan.example/rpc',
            '0x' + '22' * 32,
            artifacts_dir=Path(tmp_path / 'artifacts'),
            confirmation_timeout=60.0,
            request_timeout=30.0
        )
        procedure_cls.assert_called_once_with(
            build_context.return_value,
            contract_name='AnchorFlashLiquidator',
            expected_network='kovan',
            gas_price_multiplier=Decimal('1.05')
        )
        procedure_cls.return_value.run.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_contract_override(self, config_path):
        with patch('main.build_context'), patch('main.DeployerProcedure') as procedure_cls:
            procedure_cls.return_value.run = AsyncMock()

            await main.DeployRunner(config_path=config_path, contract_name='OtherLiquidator').start()

        assert procedure_cls.call_args.kwargs['contract_name'] == 'OtherLiquidator'


def test_parser_defaults():
    args = main.build_parser().parse_args([])

    assert args.network is None
    assert args.config == 'config/deploy_config.json'
    assert args.contract is None

"""
Deployer Package
One-shot AnchorFlashLiquidator deployment flow
"""

from .procedure import DeployerProcedure, DeployState

__all__ = ['DeployerProcedure', 'DeployState']

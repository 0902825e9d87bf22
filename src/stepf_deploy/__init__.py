"""
stepf-deploy - deploy a single AWS Step Functions state machine from a service file.

Users can import as: from stepf_deploy.deploy.deploy_handler import StepFunctionsDeployer
"""

__version__ = "0.1.0"

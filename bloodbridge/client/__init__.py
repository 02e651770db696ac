from bloodbridge.client.controller import AppController

__all__ = ["AppController"]

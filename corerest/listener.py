# Embedded response listener
#
# Lets the client choose whether associations are embedded in the response: ?_embedded=1
#
from .embedded import CollectionResponse, Embedded
from .view import View, view_rendering


class EmbeddedResponseListener:
    """
    Copies the `_embedded` query flag into the view data right before it's rendered

    - data that doesn't support embedded associations is left alone
    - an explicitly set `show_associations` is kept
    - collections always get the flag as their inherited flag, which is passed on to the items
    """

    def __init__(self, query_param=None):
        """
        :param query_param: name of the query parameter, defaults to the EMBEDDED_QUERY_PARAM config
        """
        self.query_param = query_param

    def connect(self, app=None):
        """
        Listen to `view_rendering` for `app` (all senders if no app is given)
        """
        if app is None:
            view_rendering.connect(self.on_view, weak=False)
        else:
            view_rendering.connect(self.on_view, sender=app, weak=False)

    def on_view(self, sender, request=None, view=None, **extra):
        """
        :param sender: the app rendering the view
        :param request: current CoreRestRequest
        :param view: controller result
        """
        if not isinstance(view, View):
            return

        if self.query_param is None:
            embedded = bool(request.embedded)
        else:
            embedded = bool(request.get_flag(self.query_param))
        data = view.data

        if isinstance(data, Embedded) and data.show_associations is None:
            data.show_associations = embedded

        if isinstance(data, CollectionResponse):
            data.inherited_show_associations = embedded

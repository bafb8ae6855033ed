import unittest

from nodelib.plumbing import args
from nodelib.plumbing.common import Context, State
from nodelib.tasks import services

from .plumbing import RecordingRunner, SnapDataTestCase


class TestConfigureService(SnapDataTestCase):

    def setUp(self):
        super().setUp()
        self.write_args("kubelet", "--v=2\n--node-ip 10.0.0.1\n")
        self.runner = RecordingRunner()
        self.ctx = Context.background()

    def test_changed(self):
        result = services.configure_service(self.ctx, "kubelet", {"--v": "4"},
                                            runner=self.runner)
        self.assertEqual(result.state, State.success)
        self.assertEqual(len(result.parts), 2)
        self.assertEqual(args.get_service_argument("kubelet", "--v"), "4")
        self.assertEqual(self.runner.commands, ["snapctl restart microk8s.daemon-kubelet"])

    def test_unchanged(self):
        result = services.configure_service(self.ctx, "kubelet", {"--v": "2"},
                                            runner=self.runner)
        self.assertEqual(result.state, State.unchanged)
        self.assertEqual(self.runner.commands, [])

    def test_no_restart(self):
        result = services.configure_service(self.ctx, "kubelet", deletions=["--node-ip"],
                                            restart=False, runner=self.runner)
        self.assertTrue(result)
        self.assertEqual(args.get_service_argument("kubelet", "--node-ip"), "")
        self.assertEqual(self.runner.commands, [])

    def test_kubelite(self):
        self.create_kubelite_lock()
        services.configure_service(self.ctx, "kubelet", {"--v": "4"}, runner=self.runner)
        self.assertEqual(self.runner.commands, ["snapctl restart microk8s.daemon-kubelite"])

    def test_missing(self):
        with self.assertRaises(FileNotFoundError):
            services.configure_service(self.ctx, "missing", {"--v": "4"}, runner=self.runner)
        self.assertEqual(self.runner.commands, [])


class TestRestartServices(SnapDataTestCase):

    def setUp(self):
        super().setUp()
        self.runner = RecordingRunner()

    def test_separate(self):
        result = services.restart_services(Context.background(), "apiserver", "kube-apiserver",
                                           "kubelet", runner=self.runner)
        self.assertEqual(result.state, State.success)
        self.assertEqual(self.runner.commands, ["snapctl restart microk8s.daemon-apiserver",
                                                "snapctl restart microk8s.daemon-kubelet"])

    def test_kubelite(self):
        self.create_kubelite_lock()
        services.restart_services(Context.background(), "apiserver", "kubelet", "containerd",
                                  runner=self.runner)
        self.assertEqual(self.runner.commands, ["snapctl restart microk8s.daemon-kubelite",
                                                "snapctl restart microk8s.daemon-containerd"])

    def test_cancelled(self):
        ctx = Context.background()
        ctx.cancel()
        result = services.restart_services(ctx, "apiserver", "kubelet", runner=self.runner)
        self.assertEqual(result.state, State.unchanged)
        self.assertEqual(self.runner.commands, [])


if __name__ == "__main__":
    unittest.main()

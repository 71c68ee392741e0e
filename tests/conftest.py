# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

ENGINE_JS = """import Engine from '@ember/engine';
import loadInitializers from 'ember-load-initializers';
import Resolver from 'ember-resolver';
import config from './config/environment';
import services from '@fleetbase/ember-core/exports/services';

const { modulePrefix } = config;
const externalRoutes = ['console', 'extensions'];

export default class StarterEngine extends Engine {
    modulePrefix = modulePrefix;
    Resolver = Resolver;
    dependencies = {
        services,
        externalRoutes,
    };
    setupExtension = function (app, engine, universe) {
        universe.registerHeaderMenuItem('Starter', 'console.starter', { icon: 'layer-group', priority: 5 });
    };
}

loadInitializers(StarterEngine, modulePrefix);
"""

CONTROLLER_PHP = r"""<?php

namespace Fleetbase\Starter\Http\Controllers;

use Fleetbase\Http\Controllers\FleetbaseController;

class StarterResourceController extends FleetbaseController
{
    /**
     * The package namespace used to resolve from.
     */
    public string $namespace = '\Fleetbase\Starter';
}
"""

PROVIDER_PHP = r"""<?php

namespace Fleetbase\Starter\Providers;

use Fleetbase\Providers\CoreServiceProvider;

class StarterServiceProvider extends CoreServiceProvider
{
    public function register()
    {
        $this->app->register(CoreServiceProvider::class);
    }
}
"""

CONFIG_PHP = """<?php

return [
    'api' => [
        'version' => '0.0.1',
        'routing' => [
            'prefix' => 'starter',
            'internal_prefix' => 'int'
        ]
    ],
];
"""

ROUTES_PHP = r"""<?php

use Illuminate\Support\Facades\Route;

/*
|--------------------------------------------------------------------------
| Starter API Routes
|--------------------------------------------------------------------------
*/
Route::prefix(config('starter.api.routing.prefix', 'starter'))->namespace('Fleetbase\Starter\Http\Controllers')->group(
    function ($router) {
        $router->get('status', 'StarterResourceController@status');
    }
);
"""

MODEL_PHP = r"""<?php

namespace Fleetbase\Starter\Models;

use Fleetbase\Models\Model;

class Widget extends Model
{
}
"""


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=4))


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def build_starter_template(root: Path) -> Path:
    """Write a miniature starter extension to `root`."""
    write_json(
        root / "extension.json",
        {
            "name": "Starter",
            "version": "0.0.1",
            "description": "Starter Extension",
            "repository": "https://github.com/fleetbase/starter-extension",
        },
    )
    write_json(
        root / "package.json",
        {
            "name": "@fleetbase/starter-engine",
            "version": "0.0.1",
            "description": "Starter Extension",
            "keywords": ["fleetbase-extension", "ember-engine"],
            "fleetbase": {"route": "starter"},
        },
    )
    write_json(
        root / "composer.json",
        {
            "name": "fleetbase/starter-api",
            "version": "0.0.1",
            "keywords": ["fleetbase-extension"],
            "license": "AGPL-3.0-or-later",
            "autoload": {"psr-4": {"Fleetbase\\Starter\\": "server/src/"}},
        },
    )
    write_text(root / "addon" / "engine.js", ENGINE_JS)
    write_text(
        root / "server/src/Http/Controllers/StarterResourceController.php",
        CONTROLLER_PHP,
    )
    write_text(root / "server/src/Providers/StarterServiceProvider.php", PROVIDER_PHP)
    write_text(root / "server/config/starter.php", CONFIG_PHP)
    write_text(root / "server/src/routes.php", ROUTES_PHP)
    write_text(root / "server/src/Models/Widget.php", MODEL_PHP)
    write_text(root / "README.md", "# Starter Extension\n")
    write_text(root / ".git" / "HEAD", "ref: refs/heads/main\n")
    return root


@pytest.fixture
def cli_runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_filesystem(cli_runner):
    """Run the test inside an empty working directory."""
    with cli_runner.isolated_filesystem():
        yield Path.cwd()


@pytest.fixture
def starter_template(tmp_path):
    """Local starter template used instead of cloning from GitHub."""
    return build_starter_template(tmp_path / "starter-extension")


@pytest.fixture
def extension_dir(tmp_path):
    """A starter template already copied to its final location."""
    return build_starter_template(tmp_path / "workspace" / "order-tracker")


@pytest.fixture
def fleetbase_instance(tmp_path):
    """A Fleetbase install with console and api directories."""
    instance = tmp_path / "fleetbase"
    (instance / "console").mkdir(parents=True)
    (instance / "api").mkdir(parents=True)
    return instance
